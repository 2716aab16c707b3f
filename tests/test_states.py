import pytest

from hudl_login.selectors import SELECTORS
from hudl_login.states import (
    TRANSITIONS,
    LoginState,
    next_states,
    reachable,
    signature,
    wait_for_any_state,
    wait_for_state,
)


def test_next_states_for_legal_move():
    assert next_states(LoginState.ANONYMOUS, "open_login_sub_nav") == {LoginState.SUB_NAV_OPEN}


def test_next_states_rejects_illegal_move():
    with pytest.raises(ValueError, match="submit_password"):
        next_states(LoginState.ANONYMOUS, "submit_password")


def test_submit_email_branches():
    outcomes = next_states(LoginState.ON_LOGIN_PAGE, "submit_email")
    assert LoginState.PASSWORD_PROMPT_SHOWN in outcomes
    assert LoginState.VALIDATION_ERROR in outcomes
    assert LoginState.AUTHENTICATED not in outcomes


def test_resubmitting_email_keeps_password_prompt():
    assert next_states(LoginState.PASSWORD_PROMPT_SHOWN, "submit_email") == {LoginState.PASSWORD_PROMPT_SHOWN}


def test_reachable_walks_branches():
    ends = reachable(LoginState.ON_LOGIN_PAGE, ["submit_email", "submit_password"])
    assert LoginState.AUTH_ERROR in ends
    assert LoginState.AUTHENTICATED in ends


def test_reachable_without_actions_is_start():
    assert reachable(LoginState.ON_LOGIN_PAGE, []) == {LoginState.ON_LOGIN_PAGE}


def test_reachable_rejects_dead_end():
    with pytest.raises(ValueError):
        reachable(LoginState.ANONYMOUS, ["submit_password"])


def test_authenticated_is_terminal():
    assert not [key for key in TRANSITIONS if key[0] is LoginState.AUTHENTICATED]


def test_signatures_use_registry():
    assert signature(LoginState.AUTHENTICATED) == SELECTORS.dashboard.container
    assert signature(LoginState.AUTH_ERROR) == SELECTORS.login_form.password_error
    assert signature(LoginState.EMAIL_SUBMITTED) is None


def test_wait_reports_first_visible_state(fake_page):
    fake_page.visible = {SELECTORS.login_form.password_error}
    result = wait_for_any_state(
        fake_page, [LoginState.AUTHENTICATED, LoginState.AUTH_ERROR], timeout_ms=1000
    )
    assert result.reached
    assert result.state is LoginState.AUTH_ERROR


def test_wait_polls_until_visible(fake_page):
    dashboard = SELECTORS.dashboard.container
    polls = []

    def visible(selector):
        polls.append(selector)
        return selector == dashboard and len(polls) >= 3

    fake_page.visible = visible
    result = wait_for_state(fake_page, LoginState.AUTHENTICATED, timeout_ms=60000)
    assert result.state is LoginState.AUTHENTICATED
    assert fake_page.waited_ms == 500


def test_wait_times_out_without_raising(fake_page):
    result = wait_for_state(fake_page, LoginState.AUTHENTICATED, timeout_ms=0)
    assert not result.reached
    assert result.state is None


def test_wait_needs_an_observable_state(fake_page):
    with pytest.raises(ValueError):
        wait_for_state(fake_page, LoginState.EMAIL_SUBMITTED)


def test_password_prompt_can_be_awaited_after_email():
    ends = reachable(LoginState.ON_LOGIN_PAGE, ["submit_email", "await_password_prompt"])
    assert ends == {LoginState.PASSWORD_PROMPT_SHOWN}


def test_continue_on_empty_form_is_a_validation_error():
    assert next_states(LoginState.ON_LOGIN_PAGE, "click_continue") == {LoginState.VALIDATION_ERROR}
    assert next_states(LoginState.PASSWORD_PROMPT_SHOWN, "click_continue") == {LoginState.VALIDATION_ERROR}
