# errors.py
from __future__ import annotations


class EnigmaError(ValueError):
    """Base class for every configuration or input error the machine raises."""


class ConfigurationError(EnigmaError):
    """Bad machine setup: counts, rotor placement, settings, config files."""


class CycleError(ConfigurationError):
    """Malformed cycle notation."""


class ConversionError(EnigmaError):
    """A symbol or signal index that does not fit the current alphabet."""
