"""Common exceptions for the aleo_std library."""
from __future__ import annotations


class AleoStdError(Exception):
    pass


class ConfigurationError(AleoStdError):
    pass
