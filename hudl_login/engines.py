"""
Browser engines the suite can run on, and what each one says natively.

Native constraint-validation messages are rendered by the browser, not by the
identity provider, so their wording differs per engine. Every engine the
suite knows about carries its own expected string; there is no default.
"""
from __future__ import annotations

from enum import Enum

from hudl_login.errors import UnsupportedEngineError


class Engine(str, Enum):
    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"

    @classmethod
    def parse(cls, name: str) -> "Engine":
        """Map a Playwright browser name (case-insensitive) onto an Engine."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            supported = ", ".join(e.value for e in cls)
            raise UnsupportedEngineError(
                f"Unknown browser engine {name!r}; expected one of: {supported}"
            ) from None

    @property
    def required_field_message(self) -> str:
        """Text of the native 'required' validation bubble for an empty input."""
        return _REQUIRED_FIELD_MESSAGES[self]


_REQUIRED_FIELD_MESSAGES = {
    Engine.WEBKIT: "Fill out this field",
    Engine.CHROMIUM: "Please fill out this field.",
    Engine.FIREFOX: "Please fill out this field.",
}
