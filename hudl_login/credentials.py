"""Credential and input fixtures used by the login scenarios."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from hudl_login.config import Settings
from hudl_login.errors import MissingCredentialsError

# ❌ Literal inputs; none of these belong to a real account
INVALID_EMAIL = "unregistered_email_address"
VALID_UNREGISTERED_EMAIL = "valid_unregistered_email_address@gmail.com"
GENERIC_EMAIL = "valid_email_address@gmail.com"
INVALID_PASSWORD = "invalid_password"


class CredentialKind(str, Enum):
    VALID = "valid"
    INVALID = "invalid"
    UNREGISTERED_VALID_FORMAT = "unregistered-valid-format"
    GENERIC = "generic"
    REGISTERED_WRONG_PASSWORD = "registered-wrong-password"


@dataclass(frozen=True)
class Credential:
    kind: CredentialKind
    email: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class CredentialCatalog:
    """
    All credential fixtures for one run.

    The valid account is optional at construction time: scenarios that never
    log in must still run without it. ``valid()`` raises when it is missing,
    so only the scenarios that need it fail.
    """

    valid_email: Optional[str] = None
    valid_password: Optional[str] = field(default=None, repr=False)
    invalid: Credential = Credential(CredentialKind.INVALID, INVALID_EMAIL, INVALID_PASSWORD)
    unregistered: Credential = Credential(
        CredentialKind.UNREGISTERED_VALID_FORMAT, VALID_UNREGISTERED_EMAIL, INVALID_PASSWORD
    )
    generic: Credential = Credential(CredentialKind.GENERIC, GENERIC_EMAIL, INVALID_PASSWORD)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialCatalog":
        return cls(valid_email=settings.email, valid_password=settings.password)

    def valid(self) -> Credential:
        missing = []
        if not self.valid_email:
            missing.append("HUDL_EMAIL")
        if not self.valid_password:
            missing.append("HUDL_PASSWORD")
        if missing:
            raise MissingCredentialsError(missing)
        return Credential(CredentialKind.VALID, self.valid_email, self.valid_password)

    def registered_with_wrong_password(self) -> Credential:
        """The real account email paired with a password that is not its own."""
        if not self.valid_email:
            raise MissingCredentialsError(["HUDL_EMAIL"])
        return Credential(CredentialKind.REGISTERED_WRONG_PASSWORD, self.valid_email, INVALID_PASSWORD)

    def get(self, kind: CredentialKind) -> Credential:
        if kind is CredentialKind.VALID:
            return self.valid()
        if kind is CredentialKind.REGISTERED_WRONG_PASSWORD:
            return self.registered_with_wrong_password()
        return {
            CredentialKind.INVALID: self.invalid,
            CredentialKind.UNREGISTERED_VALID_FORMAT: self.unregistered,
            CredentialKind.GENERIC: self.generic,
        }[kind]
