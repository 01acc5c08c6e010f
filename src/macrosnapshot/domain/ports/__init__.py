"""Ports (interfaces) implemented by the infrastructure layer."""

from macrosnapshot.domain.ports.data_providers import MacroeconomicDataProvider

__all__ = ["MacroeconomicDataProvider"]
