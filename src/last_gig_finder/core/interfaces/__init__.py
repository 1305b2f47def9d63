"""Core interfaces.

Protocols implemented by the adapters, so the core depends on abstractions.
"""
