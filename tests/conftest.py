from __future__ import annotations

from typing import Dict, List, Optional

import pytest

from hudl_login.browser import capture_screenshot, open_browser
from hudl_login.config import DESKTOP, Settings
from hudl_login.credentials import CredentialCatalog
from hudl_login.engines import Engine
from hudl_login.errors import MissingCredentialsError
from hudl_login.flows import LoginFlow
from hudl_login.scenarios import live_matrix


def pytest_addoption(parser):
    group = parser.getgroup("hudl", "Hudl login suite")
    group.addoption(
        "--engine",
        action="append",
        default=None,
        help="browser engine to run live scenarios on (repeatable; default from HUDL_ENGINES)",
    )
    group.addoption(
        "--live",
        action="store_true",
        default=False,
        help="run scenarios that drive a real browser against hudl.com",
    )


def _engines(config) -> List[Engine]:
    names = config.getoption("engine")
    if names:
        return list(dict.fromkeys(Engine.parse(n) for n in names))
    return list(Settings.from_env().engines)


def _explicitly_parametrized(metafunc, name: str) -> bool:
    for marker in metafunc.definition.iter_markers("parametrize"):
        argnames = marker.args[0] if marker.args else marker.kwargs.get("argnames", ())
        if isinstance(argnames, str):
            argnames = argnames.split(",")
        if name in [a.strip() for a in argnames]:
            return True
    return False


def pytest_generate_tests(metafunc):
    if "scenario" in metafunc.fixturenames:
        matrix = live_matrix(_engines(metafunc.config))
        metafunc.parametrize("scenario", matrix, ids=lambda s: s.id)
    elif "engine" in metafunc.fixturenames and not _explicitly_parametrized(metafunc, "engine"):
        metafunc.parametrize("engine", _engines(metafunc.config), ids=lambda e: e.value)


def pytest_collection_modifyitems(config, items):
    if config.getoption("live") or Settings.from_env().live:
        return
    skip_live = pytest.mark.skip(reason="live browser scenario; pass --live or set HUDL_LIVE=1")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


def attach_failure_details(item, report) -> None:
    """Add the flow steps and a screenshot to a failed setup or call report."""
    if report.when not in ("setup", "call") or not report.failed:
        return

    flow: Optional[LoginFlow] = getattr(item, "login_flow", None)
    if flow is not None and flow.steps:
        lines = [f"{n}. {step}" for n, step in enumerate(flow.steps, 1)]
        report.sections.append(("flow steps", "\n".join(lines)))

    session = getattr(item, "browser_session", None)
    if session is not None:
        path = capture_screenshot(session.page, item.artifacts_dir, item.nodeid)
        if path is not None:
            report.sections.append(("screenshot", str(path)))


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    attach_failure_details(item, outcome.get_result())


# -----------------------
# Configuration & data
# -----------------------

@pytest.fixture(scope="session")
def settings() -> Settings:
    return Settings.from_env()


@pytest.fixture(scope="session")
def catalog(settings) -> CredentialCatalog:
    return CredentialCatalog.from_settings(settings)


@pytest.fixture()
def credential(scenario, catalog):
    """What the scenario types; fails only this scenario when the real account is not configured."""
    try:
        return scenario.credential_from(catalog)
    except MissingCredentialsError as exc:
        pytest.fail(str(exc), pytrace=False)


@pytest.fixture()
def engine(request):
    """The engine bound into the scenario; plain tests get ``engine`` parametrized directly."""
    if "scenario" in request.fixturenames:
        return request.getfixturevalue("scenario").engine
    return Engine.CHROMIUM


@pytest.fixture()
def viewport(request):
    """The scenario's viewport, Desktop when it has none."""
    if "scenario" in request.fixturenames:
        return request.getfixturevalue("scenario").viewport or DESKTOP
    return DESKTOP


# -----------------------
# Browser
# -----------------------

@pytest.fixture()
def session(request, settings, engine, viewport):
    browser_session = open_browser(settings, engine, viewport)
    request.node.browser_session = browser_session
    request.node.artifacts_dir = settings.artifacts_dir
    yield browser_session
    browser_session.close()


@pytest.fixture()
def page(session):
    return session.page


@pytest.fixture()
def flow(request, page, settings) -> LoginFlow:
    login_flow = LoginFlow(page, settings)
    request.node.login_flow = login_flow
    return login_flow


# -----------------------
# Offline fakes
# -----------------------

class FakeLocator:
    def __init__(self, page: "FakePage", selector: str):
        self._page = page
        self.selector = selector

    @property
    def first(self) -> "FakeLocator":
        return self

    def is_visible(self) -> bool:
        visible = self._page.visible
        return visible(self.selector) if callable(visible) else self.selector in visible

    def get_attribute(self, name: str) -> Optional[str]:
        return self._page.attributes.get(self.selector, {}).get(name)

    def evaluate(self, expression: str):
        self._page.calls.append(("evaluate", self.selector, expression))
        return self._page.validation_messages.get(self.selector, "")


class FakePage:
    """Records driver calls instead of talking to a browser."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.visible = set()
        self.attributes: Dict[str, Dict[str, str]] = {}
        self.validation_messages: Dict[str, str] = {}
        self.waited_ms = 0
        self.screenshot_error: Optional[Exception] = None

    def goto(self, url, **kwargs):
        self.calls.append(("goto", url))

    def click(self, selector):
        self.calls.append(("click", selector))

    def fill(self, selector, value):
        self.calls.append(("fill", selector, value))

    def locator(self, selector):
        return FakeLocator(self, selector)

    def wait_for_timeout(self, ms):
        self.waited_ms += ms

    def wait_for_selector(self, selector, state="visible"):
        self.calls.append(("wait_for_selector", selector, state))

    def screenshot(self, path=None, full_page=False):
        if self.screenshot_error is not None:
            raise self.screenshot_error
        self.calls.append(("screenshot", path, full_page))
        with open(path, "wb") as fh:
            fh.write(b"\x89PNG")


@pytest.fixture()
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture()
def offline_settings(tmp_path) -> Settings:
    return Settings.from_env({"HUDL_ARTIFACTS_DIR": str(tmp_path / "artifacts")})
