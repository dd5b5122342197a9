"""pystagger.core.exceptions"""


class ConfigurationError(ValueError):
    """Raised when a grid, field or scheme is constructed in a way that would
    make a stencil read outside the storage it is allowed to touch."""
