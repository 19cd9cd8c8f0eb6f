class ConfigurationError(ValueError):
    """Raised for settings the engine cannot render with."""
