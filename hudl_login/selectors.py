"""
Locators for every element the suite touches, grouped by page area.

Names are attributes on frozen dataclasses, so a misspelt name is an
AttributeError where it is used. Whether the element actually exists is only
discovered when a flow or assertion waits for it.
"""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class NavigationSelectors:
    login_button: str = '[data-qa-id="login-select"]'
    hudl_login_link: str = '[data-qa-id="login-hudl"]'
    sub_nav_menu: str = ".mainnav__sub > .subnav__inner > .subnav__group > .subnav__items"


@dataclass(frozen=True)
class LoginFormSelectors:
    continue_button: str = '[data-action-button-primary="true"]'
    email_error: str = "#error-element-username"
    email_field: str = "#username"
    email_label: str = '[data-dynamic-label-for="username"]'
    error_icon: str = ".ulp-input-error-icon"
    password_error: str = "#error-element-password"
    password_field: str = "#password"

    @staticmethod
    def input_with_value(value: str) -> str:
        """Any input currently holding ``value`` (used to find the locked email box)."""
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'[value="{escaped}"]'


@dataclass(frozen=True)
class DashboardSelectors:
    container: str = "#koMain"


@dataclass(frozen=True)
class Selectors:
    navigation: NavigationSelectors = field(default_factory=NavigationSelectors)
    login_form: LoginFormSelectors = field(default_factory=LoginFormSelectors)
    dashboard: DashboardSelectors = field(default_factory=DashboardSelectors)
    heading: str = "h1"


SELECTORS = Selectors()
