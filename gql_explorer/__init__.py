"""Interactive schema-driven GraphQL explorer."""

__version__ = "0.1.0"
