"""Orders API: customers, products and the order workflow."""

__version__ = "1.0.0"
