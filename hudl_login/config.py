"""
Runtime configuration for the login suite.

Everything is read from environment variables once, at session start, and
handed to tests through pytest fixtures. Nothing here is mutated afterwards.

    HUDL_BASE_URL        application root (navigation scenarios start here)
    HUDL_LOGIN_URL       identity-provider identifier endpoint
    HUDL_EMAIL           registered account email
    HUDL_PASSWORD        registered account password
    HUDL_HEADLESS        "true"/"false" (default true)
    HUDL_SLOW_MO         ms delay between driver operations (default 0)
    HUDL_TIMEOUT_MS      element wait timeout (default 15000)
    HUDL_NAV_TIMEOUT_MS  navigation timeout (default 60000)
    HUDL_ENGINES         comma separated engines (default "chromium")
    HUDL_ARTIFACTS_DIR   where failure screenshots go (default "artifacts")
    HUDL_LIVE            "1" to run the live browser scenarios
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Tuple
from urllib.parse import urljoin

from hudl_login.engines import Engine
from hudl_login.errors import ConfigError

BASE_URL = "https://www.hudl.com"
LOGIN_URL = (
    "https://identity.hudl.com/u/login/identifier?state="
    "hKFo2SBuQ25Dc1I4NEVtdFctcVhoMWdwb0lhZG95MWszLWpmOKFur3VuaXZlcnNhbC1sb2dpbqN0aWTZIGljaFV1YWJiMzZu"
    "SXVUMTIxLW82c2tPaVVPYUpRVkYzo2NpZNkgbjEzUmZrSHpLb3phTnhXQzVkWlFvYmVXR2Y0V2pTbjU"
)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Viewport:
    """Named screen-size preset."""

    name: str
    width: int
    height: int

    def as_playwright(self) -> dict:
        return {"width": self.width, "height": self.height}


DESKTOP = Viewport("Desktop", 1280, 800)
MOBILE = Viewport("Mobile", 375, 812)
VIEWPORTS: Tuple[Viewport, ...] = (DESKTOP, MOBILE)


def _flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean flag, got {raw!r}")


def _millis(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer number of milliseconds, got {raw!r}") from None
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {value}")
    return value


def _engines(env: Mapping[str, str]) -> Tuple[Engine, ...]:
    raw = env.get("HUDL_ENGINES") or Engine.CHROMIUM.value
    names = [part for part in raw.split(",") if part.strip()]
    if not names:
        raise ConfigError("HUDL_ENGINES must name at least one browser engine")
    # keep order, drop duplicates
    return tuple(dict.fromkeys(Engine.parse(n) for n in names))


@dataclass(frozen=True)
class Settings:
    base_url: str = BASE_URL
    login_url: str = LOGIN_URL
    email: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)
    headless: bool = True
    slow_mo: int = 0
    timeout_ms: int = 15000
    navigation_timeout_ms: int = 60000
    engines: Tuple[Engine, ...] = (Engine.CHROMIUM,)
    artifacts_dir: Path = Path("artifacts")
    live: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            base_url=env.get("HUDL_BASE_URL") or BASE_URL,
            login_url=env.get("HUDL_LOGIN_URL") or LOGIN_URL,
            # empty strings count as "not provided"
            email=env.get("HUDL_EMAIL") or None,
            password=env.get("HUDL_PASSWORD") or None,
            headless=_flag(env, "HUDL_HEADLESS", True),
            slow_mo=_millis(env, "HUDL_SLOW_MO", 0),
            timeout_ms=_millis(env, "HUDL_TIMEOUT_MS", 15000),
            navigation_timeout_ms=_millis(env, "HUDL_NAV_TIMEOUT_MS", 60000),
            engines=_engines(env),
            artifacts_dir=Path(env.get("HUDL_ARTIFACTS_DIR") or "artifacts"),
            live=_flag(env, "HUDL_LIVE", False),
        )

    def url(self, path: str = "/") -> str:
        """Absolute URL for a path under the application root."""
        return urljoin(self.base_url.rstrip("/") + "/", path.lstrip("/"))
