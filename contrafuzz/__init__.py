"""contrafuzz — negative testing for REST API contracts."""

__version__ = "0.1.0"
