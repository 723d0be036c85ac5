"""Authentication endpoints backed by :class:`SessionService`."""

from __future__ import annotations

from flask import Blueprint, current_app

from hobbyconnect.api.deps import current_user_id, json_response, load_json, require_auth, timing
from hobbyconnect.core.auth import get_auth
from hobbyconnect.core.extensions import limiter
from hobbyconnect.schemas import (
    AccountSchema,
    GoogleSessionSchema,
    GoogleSignInSchema,
    LoginSchema,
    RefreshTokenSchema,
    RegisterSchema,
    TokenResponseSchema,
)
from hobbyconnect.services.auth.dto import GoogleSignInIn, LoginIn, LogoutIn, RefreshIn, RegisterIn

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshTokenSchema()
google_schema = GoogleSignInSchema()
token_schema = TokenResponseSchema()
google_session_schema = GoogleSessionSchema()
account_schema = AccountSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


@bp.post("/register")
@timing
def register():
    """Create a local account. No tokens are issued."""

    data = load_json(register_schema)
    account = get_auth().sessions.register(RegisterIn(**data))
    return json_response({"data": account_schema.dump(account)}, status=201)


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Authenticate credentials and open a new session."""

    data = load_json(login_schema)
    session = get_auth().sessions.login(LoginIn(**data))
    return json_response(token_schema.dump(session))


@bp.post("/refresh")
@timing
def refresh():
    """Rotate a refresh token into a new pair."""

    data = load_json(refresh_schema)
    session = get_auth().sessions.refresh(RefreshIn(**data))
    return json_response(token_schema.dump(session))


@bp.post("/logout")
@timing
def logout():
    """Retire one refresh token."""

    data = load_json(refresh_schema)
    get_auth().sessions.logout(LogoutIn(**data))
    return "", 204


@bp.post("/google")
@limiter.limit(_login_rate_limit)
@timing
def google_sign_in():
    """Sign in with a Google ID token."""

    data = load_json(google_schema)
    session = get_auth().sessions.google_sign_in(GoogleSignInIn(**data))
    return json_response(google_session_schema.dump(session))


@bp.get("/whoami")
@require_auth
@timing
def whoami():
    """Return the profile bound to the access token."""

    account = get_auth().sessions.whoami(current_user_id())
    return json_response({"data": account_schema.dump(account)})
