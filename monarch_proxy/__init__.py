"""
HTTP proxy for the Monarch transactions summary.

Authenticates callers with a static API key and relays a filters payload
to Monarch's GraphQL API using the caller's own bearer token.
"""

__version__ = "1.0.0"
