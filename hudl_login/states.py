"""
Login journey states, the moves between them, and how to tell where we are.

A state is identified by a visible element (its "signature"). Looking for a
state is a bounded wait that reports the outcome instead of raising, so a
caller can decide what a timeout means.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from playwright.sync_api import Page

from hudl_login.selectors import SELECTORS, Selectors

logger = logging.getLogger(__name__)


class LoginState(str, Enum):
    ANONYMOUS = "anonymous"
    SUB_NAV_OPEN = "sub_nav_open"
    ON_LOGIN_PAGE = "on_login_page"
    EMAIL_SUBMITTED = "email_submitted"
    PASSWORD_PROMPT_SHOWN = "password_prompt_shown"
    VALIDATION_ERROR = "validation_error"
    AUTH_ERROR = "auth_error"
    AUTHENTICATED = "authenticated"


class Field(str, Enum):
    EMAIL = "email"
    PASSWORD = "password"


# (state, action) -> states the action can lead to
TRANSITIONS: Dict[Tuple[LoginState, str], FrozenSet[LoginState]] = {
    (LoginState.ANONYMOUS, "open_login_sub_nav"): frozenset({LoginState.SUB_NAV_OPEN}),
    (LoginState.ANONYMOUS, "navigate_to_login_page"): frozenset({LoginState.ON_LOGIN_PAGE}),
    (LoginState.SUB_NAV_OPEN, "navigate_to_login_page"): frozenset({LoginState.ON_LOGIN_PAGE}),
    (LoginState.ANONYMOUS, "open_login_identifier"): frozenset({LoginState.ON_LOGIN_PAGE}),
    (LoginState.ON_LOGIN_PAGE, "submit_email"): frozenset(
        {LoginState.EMAIL_SUBMITTED, LoginState.PASSWORD_PROMPT_SHOWN, LoginState.VALIDATION_ERROR}
    ),
    (LoginState.VALIDATION_ERROR, "submit_email"): frozenset(
        {LoginState.EMAIL_SUBMITTED, LoginState.PASSWORD_PROMPT_SHOWN, LoginState.VALIDATION_ERROR}
    ),
    (LoginState.ON_LOGIN_PAGE, "click_continue"): frozenset({LoginState.VALIDATION_ERROR}),
    (LoginState.EMAIL_SUBMITTED, "await_password_prompt"): frozenset({LoginState.PASSWORD_PROMPT_SHOWN}),
    (LoginState.PASSWORD_PROMPT_SHOWN, "await_password_prompt"): frozenset({LoginState.PASSWORD_PROMPT_SHOWN}),
    (LoginState.PASSWORD_PROMPT_SHOWN, "click_continue"): frozenset({LoginState.VALIDATION_ERROR}),
    (LoginState.PASSWORD_PROMPT_SHOWN, "submit_email"): frozenset({LoginState.PASSWORD_PROMPT_SHOWN}),
    (LoginState.PASSWORD_PROMPT_SHOWN, "submit_password"): frozenset(
        {LoginState.AUTHENTICATED, LoginState.AUTH_ERROR, LoginState.VALIDATION_ERROR}
    ),
    (LoginState.AUTH_ERROR, "submit_password"): frozenset(
        {LoginState.AUTHENTICATED, LoginState.AUTH_ERROR, LoginState.VALIDATION_ERROR}
    ),
    (LoginState.ANONYMOUS, "login"): frozenset({LoginState.AUTHENTICATED, LoginState.AUTH_ERROR}),
}


def next_states(state: LoginState, action: str) -> FrozenSet[LoginState]:
    """States reachable from ``state`` via ``action``; ValueError if the move is not legal."""
    try:
        return TRANSITIONS[(state, action)]
    except KeyError:
        raise ValueError(f"{action!r} is not a legal action from {state.value!r}") from None


def reachable(start: LoginState, actions: Iterable[str]) -> FrozenSet[LoginState]:
    """
    Every state the action sequence can end in.

    Branches on which an action is not legal are dropped; ValueError if an
    action is legal on none of the current branches.
    """
    current = frozenset({start})
    for action in actions:
        following = set()
        for state in current:
            following |= TRANSITIONS.get((state, action), frozenset())
        if not following:
            names = sorted(s.value for s in current)
            raise ValueError(f"{action!r} is not a legal action from any of {names}")
        current = frozenset(following)
    return current


def signature(state: LoginState, selectors: Selectors = SELECTORS) -> Optional[str]:
    """Selector whose visibility identifies ``state`` (None for transient states)."""
    nav, form = selectors.navigation, selectors.login_form
    return {
        LoginState.ANONYMOUS: nav.login_button,
        LoginState.SUB_NAV_OPEN: nav.sub_nav_menu,
        LoginState.ON_LOGIN_PAGE: form.email_field,
        LoginState.EMAIL_SUBMITTED: None,
        LoginState.PASSWORD_PROMPT_SHOWN: form.password_field,
        LoginState.VALIDATION_ERROR: form.email_error,
        LoginState.AUTH_ERROR: form.password_error,
        LoginState.AUTHENTICATED: selectors.dashboard.container,
    }[state]


@dataclass(frozen=True)
class WaitResult:
    """Outcome of a bounded wait: which state showed up, if any, and how long it took."""

    state: Optional[LoginState]
    elapsed_ms: int

    @property
    def reached(self) -> bool:
        return self.state is not None


def wait_for_any_state(
    page: Page,
    states: Iterable[LoginState],
    timeout_ms: int = 15000,
    poll_ms: int = 250,
    selectors: Selectors = SELECTORS,
) -> WaitResult:
    """
    Poll until one of ``states`` is visible or ``timeout_ms`` runs out.

    States are checked in the order given, so list the more specific ones
    first when two signatures can be visible together.
    """
    candidates = [(s, signature(s, selectors)) for s in states]
    candidates = [(s, sel) for s, sel in candidates if sel is not None]
    if not candidates:
        raise ValueError("no observable state to wait for")

    start = time.monotonic()
    while True:
        for state, selector in candidates:
            if page.locator(selector).first.is_visible():
                elapsed = int((time.monotonic() - start) * 1000)
                logger.debug("Reached %s after %d ms", state.value, elapsed)
                return WaitResult(state, elapsed)
        elapsed = int((time.monotonic() - start) * 1000)
        if elapsed >= timeout_ms:
            logger.debug("None of %s visible within %d ms", [s.value for s, _ in candidates], timeout_ms)
            return WaitResult(None, elapsed)
        page.wait_for_timeout(poll_ms)


def wait_for_state(page: Page, state: LoginState, timeout_ms: int = 15000, selectors: Selectors = SELECTORS) -> WaitResult:
    return wait_for_any_state(page, [state], timeout_ms=timeout_ms, selectors=selectors)
