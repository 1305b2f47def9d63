"""Domain models and pure helpers.

The domain knows nothing about HTTP, the CLI or SDKs: only concerts, venues
and distances.
"""
