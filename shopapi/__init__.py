"""JSON-file backed products and carts API."""

__version__ = "0.1.0"
