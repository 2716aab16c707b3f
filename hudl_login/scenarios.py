"""
The scenario matrix: which situations the suite verifies and what it expects.

Scenarios are listed by hand. Three dimensions are expanded by loops: the
navigation scenarios over ``VIEWPORTS``, the email-format scenario over
``MALFORMED_EMAILS``, and every scenario over the engines a run selects.
The live suite is generated from ``live_matrix``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Iterator, Optional, Tuple

from hudl_login.config import VIEWPORTS, Viewport
from hudl_login.credentials import INVALID_PASSWORD, Credential, CredentialCatalog, CredentialKind
from hudl_login.engines import Engine
from hudl_login.states import Field, LoginState

# Expected observations. Compared literally.
ERROR_COLOUR = "rgb(232, 28, 0)"
LOGIN_HEADING = "Log In"
LOGIN_URL_PATTERN = re.compile(r".*/login")
EMAIL_LABEL = "Email*"
EMAIL_FORMAT_ERROR = "Enter a valid email"

# Things like "plainaddress" that can never be an email
MALFORMED_EMAILS: Tuple[str, ...] = (
    "unregistered_email_address",
    "plainaddress",
    "name.example.com",
)


class AuthErrorReason(str, Enum):
    """
    Why the password step was rejected.

    The identity provider words the two cases differently. Both wordings are
    asserted as-is.
    """

    WRONG_PASSWORD = "wrong_password"
    UNREGISTERED_EMAIL = "unregistered_email"

    @property
    def message(self) -> str:
        return _AUTH_ERROR_MESSAGES[self]


_AUTH_ERROR_MESSAGES = {
    AuthErrorReason.WRONG_PASSWORD: "Your email or password is incorrect. Try again.",
    AuthErrorReason.UNREGISTERED_EMAIL: "Incorrect username or password.",
}


def auth_error_reason(kind: CredentialKind) -> AuthErrorReason:
    """Which error a wrong password produces, given what kind of email preceded it."""
    if kind is CredentialKind.REGISTERED_WRONG_PASSWORD:
        return AuthErrorReason.WRONG_PASSWORD
    if kind in (CredentialKind.UNREGISTERED_VALID_FORMAT, CredentialKind.GENERIC):
        return AuthErrorReason.UNREGISTERED_EMAIL
    # VALID signs in; INVALID never gets past the email step
    raise ValueError(f"no authentication error defined for {kind!r}")


class Check(str, Enum):
    """The observation verified once a scenario's actions have run."""

    SUB_NAV_VISIBLE = "sub_nav_visible"
    LOGIN_LINK_VISIBLE = "login_link_visible"
    LOGIN_PAGE_SHOWN = "login_page_shown"
    EMAIL_FIELD_LABELLED = "email_field_labelled"
    CONTINUE_SHOWN = "continue_shown"
    REQUIRED_FIELD_MESSAGE = "required_field_message"
    EMAIL_FORMAT_ERROR = "email_format_error"
    PASSWORD_REVEALED = "password_revealed"
    AUTH_ERROR = "auth_error"
    DASHBOARD_VISIBLE = "dashboard_visible"


@dataclass(frozen=True)
class Scenario:
    id: str
    entry: Optional[str]
    start: LoginState
    actions: Tuple[str, ...]
    expected: LoginState
    check: Check
    credential: Optional[CredentialKind] = None
    email: Optional[str] = None
    field: Optional[Field] = None
    viewport: Optional[Viewport] = None
    engine: Optional[Engine] = None

    @property
    def engine_specific(self) -> bool:
        """Whether the expected text is rendered by the browser rather than the page."""
        return self.check is Check.REQUIRED_FIELD_MESSAGE

    @property
    def reason(self) -> Optional[AuthErrorReason]:
        if self.check is not Check.AUTH_ERROR:
            return None
        return auth_error_reason(self.credential)

    def credential_from(self, catalog: CredentialCatalog) -> Optional[Credential]:
        """The input this scenario types; MissingCredentialsError if it needs the real account."""
        if self.email is not None:
            return Credential(self.credential, self.email, INVALID_PASSWORD)
        if self.credential is None:
            return None
        return catalog.get(self.credential)

    def with_viewport(self, viewport: Viewport) -> "Scenario":
        return replace(self, id=f"{self.id}-{viewport.name}", viewport=viewport)

    def with_email(self, email: str) -> "Scenario":
        return replace(self, id=f"{self.id}-{email}", email=email)

    def with_engine(self, engine: Engine) -> "Scenario":
        return replace(self, id=f"{self.id}-{engine.value}", engine=engine)


def _from_root(id: str, actions: Tuple[str, ...], expected: LoginState, check: Check) -> Scenario:
    return Scenario(id, "open_app_root", LoginState.ANONYMOUS, actions, expected, check)


def _on_login_page(id: str, actions: Tuple[str, ...], expected: LoginState, check: Check, **kwargs) -> Scenario:
    return Scenario(id, "open_login_identifier", LoginState.ON_LOGIN_PAGE, actions, expected, check, **kwargs)


NAVIGATION_SCENARIOS: Tuple[Scenario, ...] = (
    _from_root("sub_nav_opens", ("open_login_sub_nav",), LoginState.SUB_NAV_OPEN, Check.SUB_NAV_VISIBLE),
    _from_root("hudl_login_link_shown", ("open_login_sub_nav",), LoginState.SUB_NAV_OPEN, Check.LOGIN_LINK_VISIBLE),
    _from_root("login_link_navigates", ("navigate_to_login_page",), LoginState.ON_LOGIN_PAGE, Check.LOGIN_PAGE_SHOWN),
)

LOGIN_PAGE_SCENARIOS: Tuple[Scenario, ...] = (
    _on_login_page("email_field_labelled", (), LoginState.ON_LOGIN_PAGE, Check.EMAIL_FIELD_LABELLED),
    _on_login_page("continue_button_shown", (), LoginState.ON_LOGIN_PAGE, Check.CONTINUE_SHOWN),
    _on_login_page(
        "empty_email_required",
        ("click_continue",),
        LoginState.VALIDATION_ERROR,
        Check.REQUIRED_FIELD_MESSAGE,
        field=Field.EMAIL,
    ),
    _on_login_page(
        "malformed_email_rejected",
        ("submit_email",),
        LoginState.VALIDATION_ERROR,
        Check.EMAIL_FORMAT_ERROR,
        credential=CredentialKind.INVALID,
        field=Field.EMAIL,
    ),
    _on_login_page(
        "generic_email_reveals_password",
        ("submit_email",),
        LoginState.PASSWORD_PROMPT_SHOWN,
        Check.PASSWORD_REVEALED,
        credential=CredentialKind.GENERIC,
    ),
    _on_login_page(
        "unregistered_email_reveals_password",
        ("submit_email",),
        LoginState.PASSWORD_PROMPT_SHOWN,
        Check.PASSWORD_REVEALED,
        credential=CredentialKind.UNREGISTERED_VALID_FORMAT,
    ),
    _on_login_page(
        "registered_email_wrong_password",
        ("submit_email", "submit_password"),
        LoginState.AUTH_ERROR,
        Check.AUTH_ERROR,
        credential=CredentialKind.REGISTERED_WRONG_PASSWORD,
    ),
    _on_login_page(
        "unregistered_email_wrong_password",
        ("submit_email", "submit_password"),
        LoginState.AUTH_ERROR,
        Check.AUTH_ERROR,
        credential=CredentialKind.UNREGISTERED_VALID_FORMAT,
    ),
    _on_login_page(
        "empty_password_required",
        ("submit_email", "await_password_prompt", "click_continue"),
        LoginState.VALIDATION_ERROR,
        Check.REQUIRED_FIELD_MESSAGE,
        credential=CredentialKind.UNREGISTERED_VALID_FORMAT,
        field=Field.PASSWORD,
    ),
)

SUCCESS_SCENARIOS: Tuple[Scenario, ...] = (
    Scenario(
        "valid_credentials_reach_dashboard",
        None,
        LoginState.ANONYMOUS,
        ("login",),
        LoginState.AUTHENTICATED,
        Check.DASHBOARD_VISIBLE,
        credential=CredentialKind.VALID,
    ),
)


def navigation_matrix() -> Iterator[Scenario]:
    """Every navigation scenario once per viewport preset."""
    for viewport in VIEWPORTS:
        for scenario in NAVIGATION_SCENARIOS:
            yield scenario.with_viewport(viewport)


def login_page_matrix() -> Iterator[Scenario]:
    """Login page scenarios, with the format check repeated for each malformed email."""
    for scenario in LOGIN_PAGE_SCENARIOS:
        if scenario.check is Check.EMAIL_FORMAT_ERROR:
            for email in MALFORMED_EMAILS:
                yield scenario.with_email(email)
        else:
            yield scenario


def all_scenarios() -> Tuple[Scenario, ...]:
    return tuple(navigation_matrix()) + tuple(login_page_matrix()) + SUCCESS_SCENARIOS


def live_matrix(engines: Iterable[Engine]) -> Tuple[Scenario, ...]:
    """Every scenario bound to every selected engine; what the live suite runs."""
    engines = tuple(engines)
    if not engines:
        raise ValueError("at least one engine is needed to run scenarios")
    return tuple(s.with_engine(e) for s in all_scenarios() for e in engines)


def scenario(scenario_id: str) -> Scenario:
    """Look up a scenario by id (expanded ids included, engine suffix excluded)."""
    for s in all_scenarios():
        if s.id == scenario_id:
            return s
    raise KeyError(scenario_id)
