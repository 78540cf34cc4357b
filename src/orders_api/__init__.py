"""Orders API: traced read endpoint for orders kept in Redis."""

__version__ = "0.1.0"
