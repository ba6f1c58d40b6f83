"""Internal modules for streamreq.

WARNING: This package contains modules used by RequestController.
These are not intended for direct use in application code.

Modules:
    http - Shared HTTP client configuration
    signals - Synchronous observer lists
    transport - Transport protocol, httpx implementation and error codes
"""
