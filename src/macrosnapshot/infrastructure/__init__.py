"""Infrastructure layer: HTTP providers, aggregation, config and wiring."""
