"""Transport and integration helpers for the client."""
