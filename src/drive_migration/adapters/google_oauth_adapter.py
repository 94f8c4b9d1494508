from __future__ import annotations

import time
from urllib.parse import parse_qs, urlencode, urlparse
from uuid import uuid4

import requests

from drive_migration.domain.errors import AuthError
from drive_migration.domain.models import Account, SignInRequest, SignInResult
from drive_migration.ports.auth_port import AuthPort

DRIVE_FILE_SCOPE = "https://www.googleapis.com/auth/drive.file"
PROFILE_SCOPES = ("openid", "email", "profile")

_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
_OAUTH_TOKEN_URL = "https://oauth2.googleapis.com/token"
_USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"


class GoogleOAuthAdapter(AuthPort):
    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        scopes: tuple[str, ...] = (DRIVE_FILE_SCOPE, *PROFILE_SCOPES),
        timeout: float = 20,
    ) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self._redirect_uri = redirect_uri
        self._scopes = scopes
        self._timeout = timeout
        self._pending_state: str | None = None

    @property
    def redirect_uri(self) -> str:
        return self._redirect_uri

    def begin_sign_in(self) -> SignInRequest:
        if not self._client_id or not self._client_secret:
            raise AuthError("Client ID and Client Secret are required for OAuth.")
        state = str(uuid4())
        self._pending_state = state
        params = {
            "client_id": self._client_id,
            "redirect_uri": self._redirect_uri,
            "response_type": "code",
            "scope": " ".join(self._scopes),
            "access_type": "offline",
            "prompt": "consent",
            "state": state,
        }
        return SignInRequest(auth_url=f"{_AUTH_URL}?{urlencode(params)}", state=state)

    def complete_sign_in(self, result: SignInResult) -> Account:
        if result.error:
            raise AuthError(f"OAuth error: {result.error}")
        if not result.code:
            raise AuthError("Missing authorization code.")
        if result.state is not None and result.state != self._pending_state:
            raise AuthError("State mismatch.")
        token_data = self._exchange_code_for_token(result.code)
        access_token = token_data.get("access_token", "")
        if not access_token:
            raise AuthError("OAuth did not return an access token.")
        expires_in = int(token_data.get("expires_in", 3600))
        email = self._fetch_email(access_token)
        self._pending_state = None
        granted = token_data.get("scope")
        return Account(
            email=email,
            access_token=access_token,
            refresh_token=token_data.get("refresh_token"),
            expires_at=time.time() + expires_in - 60,
            scopes=tuple(granted.split()) if granted else self._scopes,
        )

    @staticmethod
    def parse_redirect_url(value: str) -> SignInResult:
        parsed = urlparse((value or "").strip())
        params = parse_qs(parsed.query)
        return SignInResult(
            code=params.get("code", [None])[0],
            state=params.get("state", [None])[0],
            error=params.get("error", [None])[0],
        )

    def _exchange_code_for_token(self, code: str) -> dict:
        try:
            response = requests.post(
                _OAUTH_TOKEN_URL,
                data={
                    "code": code,
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                    "redirect_uri": self._redirect_uri,
                    "grant_type": "authorization_code",
                },
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise AuthError(f"Token exchange failed: {exc}") from exc
        if response.status_code >= 400:
            raise AuthError(f"Token exchange failed: {response.status_code} {response.text}")
        return response.json()

    def _fetch_email(self, access_token: str) -> str:
        try:
            response = requests.get(
                _USERINFO_URL,
                headers={"Authorization": f"Bearer {access_token}"},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise AuthError(f"Profile lookup failed: {exc}") from exc
        if response.status_code >= 400:
            raise AuthError(f"Profile lookup failed: {response.status_code} {response.text}")
        return response.json().get("email", "")
