class ConfigurationError(ValueError):
    """Raised for any malformed machine configuration, setup line or input."""
