"""Exception types raised by the scoped settings file helpers.

The `SettingsFile` contract itself reports outcomes as result codes; these
exceptions are for callers that prefer `with` blocks and iteration.
"""


class SettingsFileError(Exception):
    """Base exception for settings file failures."""


class InvalidStateError(SettingsFileError):
    """Operation attempted in the wrong open state."""


class SettingsIOError(SettingsFileError, OSError):
    """The underlying storage medium failed."""
