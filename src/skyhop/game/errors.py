class ConfigError(ValueError):
    """Raised at startup when the game is configured with unusable values."""
