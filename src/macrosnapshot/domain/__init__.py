"""Domain layer: models, ports and static series tables."""
