class FalconwatchError(Exception):
    """Base exception for Falconwatch errors."""


class ConfigError(FalconwatchError):
    """Raised for invalid configuration content."""


class CalibrationError(ConfigError):
    """Raised when a calibration table fails validation."""


class UnknownSiteError(FalconwatchError, KeyError):
    """Raised by strict launch site lookups for an unregistered site id."""
