"""Error types raised by the typing core."""


class ConfigurationError(ValueError):
    """Fatal setup problem: unknown time mode, or a missing/malformed corpus resource."""
