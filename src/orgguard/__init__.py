"""orgguard - organization membership and authorization backend."""

__version__ = "0.1.0"
