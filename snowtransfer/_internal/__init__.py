"""Internal modules for SnowTransfer.

WARNING: These modules back the public client and are not intended for
direct use in application code.

Modules:
    dispatch - Request dispatcher
    http - Shared HTTP client configuration
"""
