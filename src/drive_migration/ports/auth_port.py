from __future__ import annotations

from typing import Protocol, runtime_checkable

from drive_migration.domain.models import Account, SignInRequest, SignInResult


@runtime_checkable
class AuthPort(Protocol):
    def begin_sign_in(self) -> SignInRequest:
        """Prepare the consent URL the user has to visit."""

    def complete_sign_in(self, result: SignInResult) -> Account:
        """Turn a consent result into an authenticated account."""
