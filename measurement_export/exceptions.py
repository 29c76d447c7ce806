class ExportError(Exception):
    """Base error for measurement export failures."""


class ConfigError(ExportError):
    """Raised when required settings (API URL, token) are missing or invalid."""
