"""Find the last time an artist played near you."""

__version__ = "1.0.0"
