from unittest.mock import Mock
from urllib.parse import parse_qs, urlparse

import pytest
import requests

from drive_migration.adapters import google_oauth_adapter
from drive_migration.adapters.google_oauth_adapter import DRIVE_FILE_SCOPE, GoogleOAuthAdapter
from drive_migration.domain.errors import AuthError
from drive_migration.domain.models import SignInResult


def _adapter() -> GoogleOAuthAdapter:
    return GoogleOAuthAdapter(
        client_id="client-id",
        client_secret="client-secret",
        redirect_uri="http://localhost:8080/",
    )


def _response(status_code: int = 200, payload: dict | None = None) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    response.text = "error body"
    return response


def test_begin_sign_in_requests_per_file_scope() -> None:
    adapter = _adapter()

    request = adapter.begin_sign_in()

    params = parse_qs(urlparse(request.auth_url).query)
    assert params["scope"] == [f"{DRIVE_FILE_SCOPE} openid email profile"]
    assert params["client_id"] == ["client-id"]
    assert params["redirect_uri"] == ["http://localhost:8080/"]
    assert params["response_type"] == ["code"]
    assert params["state"] == [request.state]


def test_begin_sign_in_requires_client_credentials() -> None:
    adapter = GoogleOAuthAdapter(client_id="", client_secret="", redirect_uri="http://localhost:8080/")

    with pytest.raises(AuthError, match="Client ID and Client Secret are required"):
        adapter.begin_sign_in()


def test_complete_sign_in_exchanges_code(monkeypatch) -> None:
    post = Mock(
        return_value=_response(
            payload={
                "access_token": "access",
                "refresh_token": "refresh",
                "expires_in": 3600,
                "scope": f"{DRIVE_FILE_SCOPE} openid",
            }
        )
    )
    get = Mock(return_value=_response(payload={"email": "user@example.com"}))
    monkeypatch.setattr(google_oauth_adapter.requests, "post", post)
    monkeypatch.setattr(google_oauth_adapter.requests, "get", get)
    adapter = _adapter()
    request = adapter.begin_sign_in()

    account = adapter.complete_sign_in(SignInResult(code="auth-code", state=request.state))

    assert account.email == "user@example.com"
    assert account.access_token == "access"
    assert account.refresh_token == "refresh"
    assert account.scopes == (DRIVE_FILE_SCOPE, "openid")
    assert post.call_args.kwargs["data"]["code"] == "auth-code"
    assert post.call_args.kwargs["data"]["grant_type"] == "authorization_code"
    assert get.call_args.kwargs["headers"] == {"Authorization": "Bearer access"}


@pytest.mark.parametrize(
    ("result", "message"),
    [
        (SignInResult(code=None, state=None, error="access_denied"), "OAuth error: access_denied"),
        (SignInResult(code=None, state=None), "Missing authorization code."),
        (SignInResult(code="code", state="not-the-state"), "State mismatch."),
    ],
)
def test_complete_sign_in_rejects_bad_results(result, message) -> None:
    adapter = _adapter()
    adapter.begin_sign_in()

    with pytest.raises(AuthError, match=message):
        adapter.complete_sign_in(result)


def test_token_exchange_failure_raises(monkeypatch) -> None:
    monkeypatch.setattr(
        google_oauth_adapter.requests, "post", Mock(return_value=_response(status_code=400))
    )
    adapter = _adapter()
    request = adapter.begin_sign_in()

    with pytest.raises(AuthError, match="Token exchange failed: 400"):
        adapter.complete_sign_in(SignInResult(code="code", state=request.state))


def test_token_transport_failure_raises(monkeypatch) -> None:
    monkeypatch.setattr(
        google_oauth_adapter.requests,
        "post",
        Mock(side_effect=requests.ConnectionError("offline")),
    )
    adapter = _adapter()
    request = adapter.begin_sign_in()

    with pytest.raises(AuthError, match="Token exchange failed"):
        adapter.complete_sign_in(SignInResult(code="code", state=request.state))


def test_missing_access_token_raises(monkeypatch) -> None:
    monkeypatch.setattr(
        google_oauth_adapter.requests, "post", Mock(return_value=_response(payload={}))
    )
    adapter = _adapter()
    request = adapter.begin_sign_in()

    with pytest.raises(AuthError, match="did not return an access token"):
        adapter.complete_sign_in(SignInResult(code="code", state=request.state))


def test_parse_redirect_url_extracts_code_and_state() -> None:
    result = GoogleOAuthAdapter.parse_redirect_url(
        "http://localhost:8080/?state=abc&code=4%2F0Ab&scope=email"
    )

    assert result == SignInResult(code="4/0Ab", state="abc", error=None)


def test_parse_redirect_url_reports_error() -> None:
    result = GoogleOAuthAdapter.parse_redirect_url("http://localhost:8080/?error=access_denied")

    assert result.code is None
    assert result.error == "access_denied"
