"""Exceptions raised by the harness itself (not by the browser)."""


class HarnessError(Exception):
    """Base class for harness failures."""


class ConfigError(HarnessError):
    """An environment variable holds a value we cannot parse."""


class MissingCredentialsError(HarnessError):
    """Valid account credentials were not provided in the environment."""

    def __init__(self, missing):
        self.missing = tuple(missing)
        names = ", ".join(self.missing)
        super().__init__(
            f"Valid credentials are required for this scenario; set {names} in the environment."
        )


class UnsupportedEngineError(HarnessError):
    """A browser engine name outside the supported set was requested."""
