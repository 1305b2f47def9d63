"""Use cases: nearby-concert search, message composition and setup."""
