"""Product catalog and shopping cart HTTP service."""

__version__ = "1.0.0"
