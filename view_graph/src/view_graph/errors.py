"""
User-facing errors.

Analysis itself never raises: unresolved views and malformed classes come back as
empty results. Only problems the user has to fix, such as a broken configuration
file, are reported through these classes.
"""


class ViewGraphError(Exception):
    """Base class for all user-facing errors."""
    pass


class ConfigError(ViewGraphError):
    """The configuration file exists but cannot be used."""
    pass


__all__ = ["ViewGraphError", "ConfigError"]
