"""
Checks run after a flow has driven the page.

Web-first checks go through Playwright's ``expect`` (it retries until the
element timeout and reports expected vs actual). Values read once, like an
attribute or a native validation message, are compared with plain asserts
whose message carries both sides.
"""
from __future__ import annotations

from typing import Optional, Pattern, Union

from playwright.sync_api import Page, expect

from hudl_login.credentials import Credential
from hudl_login.engines import Engine
from hudl_login.scenarios import (
    EMAIL_FORMAT_ERROR,
    EMAIL_LABEL,
    ERROR_COLOUR,
    LOGIN_HEADING,
    LOGIN_URL_PATTERN,
    Check,
    Scenario,
)
from hudl_login.selectors import SELECTORS, Selectors
from hudl_login.states import Field, LoginState, signature, wait_for_state


def assert_visible(page: Page, selector: str) -> None:
    expect(page.locator(selector)).to_be_visible()


def assert_enabled(page: Page, selector: str) -> None:
    expect(page.locator(selector)).to_be_enabled()


def assert_contains_text(page: Page, selector: str, text: str) -> None:
    expect(page.locator(selector)).to_contain_text(text)


def assert_has_text(page: Page, selector: str, text: str) -> None:
    expect(page.locator(selector)).to_have_text(text)


def assert_error_colour(page: Page, selector: str) -> None:
    """Computed ``color`` must serialize exactly as the product's error red."""
    expect(page.locator(selector)).to_have_css("color", ERROR_COLOUR)


def assert_error_styled(page: Page, error_selector: str, text: str, selectors: Selectors = SELECTORS) -> None:
    """
    An inline error is showing ``text`` in error red, with the red error icon.

    Used for both the email-format error and the password-step errors.
    """
    assert_visible(page, error_selector)
    assert_error_colour(page, error_selector)
    assert_contains_text(page, error_selector, text)

    icon = selectors.login_form.error_icon
    assert_visible(page, icon)
    assert_error_colour(page, icon)


def assert_attribute_present(page: Page, selector: str, attribute: str) -> None:
    value = page.locator(selector).get_attribute(attribute)
    assert value is not None, f"Expected {selector} to carry the {attribute!r} attribute, but it is absent"


def assert_url_matches(page: Page, pattern: Union[str, Pattern[str]]) -> None:
    expect(page).to_have_url(pattern)


def assert_login_page_shown(page: Page, selectors: Selectors = SELECTORS) -> None:
    assert_url_matches(page, LOGIN_URL_PATTERN)
    assert_has_text(page, selectors.heading, LOGIN_HEADING)


def validation_message(page: Page, selector: str) -> str:
    """The browser's own constraint-validation text for an input."""
    return page.locator(selector).evaluate("el => el.validationMessage")


def assert_required_field_message(page: Page, selector: str, engine: Engine) -> None:
    """
    The native 'required' message for an empty input, per engine.

    WebKit and the Chromium family word it differently; each branch checks its
    own string and an engine outside the known set is rejected.
    """
    message = validation_message(page, selector)
    if engine is Engine.WEBKIT:
        expected = Engine.WEBKIT.required_field_message
    elif engine in (Engine.CHROMIUM, Engine.FIREFOX):
        expected = engine.required_field_message
    else:
        raise AssertionError(f"No required-field message known for engine {engine!r}")
    assert message == expected, (
        f"{engine.value}: expected validation message {expected!r} on {selector}, got {message!r}"
    )


def assert_state(page: Page, state: LoginState, timeout_ms: int = 15000, selectors: Selectors = SELECTORS) -> None:
    result = wait_for_state(page, state, timeout_ms=timeout_ms, selectors=selectors)
    assert result.reached, (
        f"Expected the {state.value} state ({signature(state, selectors)} visible) "
        f"within {timeout_ms} ms, but it never appeared"
    )


def verify(
    page: Page,
    scenario: Scenario,
    credential: Optional[Credential] = None,
    timeout_ms: int = 15000,
    selectors: Selectors = SELECTORS,
) -> None:
    """
    Check that ``scenario`` ended where it should and shows what it should.

    The expected state is confirmed first through its signature element.
    Engine-rendered messages have no signature in the page, so for those the
    engine-branched check stands alone.
    """
    nav, form = selectors.navigation, selectors.login_form
    check = scenario.check

    if not scenario.engine_specific and signature(scenario.expected, selectors) is not None:
        assert_state(page, scenario.expected, timeout_ms=timeout_ms, selectors=selectors)

    if check is Check.SUB_NAV_VISIBLE:
        assert_visible(page, nav.sub_nav_menu)
    elif check is Check.LOGIN_LINK_VISIBLE:
        assert_visible(page, nav.hudl_login_link)
    elif check is Check.LOGIN_PAGE_SHOWN:
        assert_login_page_shown(page, selectors)
    elif check is Check.EMAIL_FIELD_LABELLED:
        assert_visible(page, form.email_field)
        assert_enabled(page, form.email_field)
        assert_contains_text(page, form.email_label, EMAIL_LABEL)
    elif check is Check.CONTINUE_SHOWN:
        assert_visible(page, form.continue_button)
    elif check is Check.REQUIRED_FIELD_MESSAGE:
        if scenario.engine is None:
            raise ValueError(f"{scenario.id}: the expected message depends on the engine, none was bound")
        selector = form.email_field if scenario.field is Field.EMAIL else form.password_field
        assert_required_field_message(page, selector, scenario.engine)
    elif check is Check.EMAIL_FORMAT_ERROR:
        assert_error_styled(page, form.email_error, EMAIL_FORMAT_ERROR, selectors)
    elif check is Check.PASSWORD_REVEALED:
        assert_visible(page, form.password_field)
        assert_attribute_present(page, form.input_with_value(credential.email), "readonly")
    elif check is Check.AUTH_ERROR:
        assert_error_styled(page, form.password_error, scenario.reason.message, selectors)
    elif check is Check.DASHBOARD_VISIBLE:
        assert_visible(page, selectors.dashboard.container)
    else:
        raise ValueError(f"no verification defined for {check!r}")
