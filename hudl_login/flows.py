"""
User actions that move the browser through the login journey.

Actions only drive the page. They never check that they worked; the scenario
does that afterwards through ``hudl_login.assertions``. Every step is logged
and recorded in ``LoginFlow.steps`` so a failing scenario can say how far it
got.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from playwright.sync_api import Page

from hudl_login.config import Settings
from hudl_login.credentials import Credential
from hudl_login.scenarios import Scenario
from hudl_login.selectors import SELECTORS, Selectors
from hudl_login.states import reachable

logger = logging.getLogger(__name__)


class LoginFlow:
    def __init__(self, page: Page, settings: Settings, selectors: Selectors = SELECTORS):
        self.page = page
        self.settings = settings
        self.selectors = selectors
        self.steps: List[str] = []

    def _step(self, description: str) -> None:
        self.steps.append(description)
        logger.debug("step %d: %s", len(self.steps), description)

    # -----------------------
    # Entry points
    # -----------------------

    def open_app_root(self) -> None:
        """Load the marketing site root, where navigation scenarios start."""
        url = self.settings.url("/")
        self._step(f"goto {url}")
        self.page.goto(url, wait_until="domcontentloaded")

    def open_login_identifier(self) -> None:
        """Load the identity provider's email prompt directly, skipping the site nav."""
        self._step("goto login identifier")
        self.page.goto(self.settings.login_url, wait_until="domcontentloaded")

    # -----------------------
    # Navigation
    # -----------------------

    def open_login_sub_nav(self) -> None:
        self._step("click login button")
        self.page.click(self.selectors.navigation.login_button)

    def navigate_to_login_page(self) -> None:
        self.open_login_sub_nav()
        self._step("click Hudl login link")
        self.page.click(self.selectors.navigation.hudl_login_link)

    # -----------------------
    # Login form
    # -----------------------

    def click_continue(self) -> None:
        self._step("click continue")
        self.page.click(self.selectors.login_form.continue_button)

    def submit_email(self, email: str) -> None:
        """Fill the email field and continue."""
        self._step(f"fill email {email!r}")
        self.page.fill(self.selectors.login_form.email_field, email)
        self.click_continue()

    def submit_password(self, password: str) -> None:
        """Fill the password field and continue. The password itself is never logged."""
        self._step("fill password")
        self.page.fill(self.selectors.login_form.password_field, password)
        self.click_continue()

    def login(self, email: str, password: str) -> None:
        """Full sign-in starting from the identifier endpoint."""
        self.open_login_identifier()
        self.submit_email(email)
        self.submit_password(password)

    def await_password_prompt(self) -> None:
        """Block until the email step has handed over to the password step."""
        self._step("wait for password field")
        self.page.wait_for_selector(self.selectors.login_form.password_field, state="visible")

    # -----------------------
    # Scenarios
    # -----------------------

    _NO_INPUT = (
        "open_app_root",
        "open_login_identifier",
        "open_login_sub_nav",
        "navigate_to_login_page",
        "click_continue",
        "await_password_prompt",
    )

    def perform(self, action: str, credential: Optional[Credential] = None) -> None:
        """Run one named action, typing from ``credential`` where the action needs input."""
        if action in self._NO_INPUT:
            getattr(self, action)()
            return
        if action not in ("submit_email", "submit_password", "login"):
            raise ValueError(f"unknown flow action {action!r}")
        if credential is None:
            raise ValueError(f"{action!r} needs a credential")
        if action == "submit_email":
            self.submit_email(credential.email)
        elif action == "submit_password":
            self.submit_password(credential.password)
        else:
            self.login(credential.email, credential.password)

    def play(self, scenario: Scenario, credential: Optional[Credential] = None) -> None:
        """Open the scenario's entry point and run its actions in order."""
        if scenario.expected not in reachable(scenario.start, scenario.actions):
            raise ValueError(
                f"{scenario.id}: {scenario.expected.value!r} cannot follow {list(scenario.actions)}"
            )
        logger.info("Playing %s", scenario.id)
        if scenario.entry:
            self.perform(scenario.entry)
        for action in scenario.actions:
            self.perform(action, credential)
