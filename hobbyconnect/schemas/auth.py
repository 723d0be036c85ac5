"""Authentication-related Marshmallow schemas (camelCase on the wire)."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class RegisterSchema(Schema):
    """Input payload for account registration."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))
    name = fields.String(load_default=None, validate=validate.Length(min=1, max=100))
    avatar_url = fields.String(
        data_key="avatarUrl", load_default=None, validate=validate.Length(max=512)
    )


class LoginSchema(Schema):
    """Input payload for authenticating a user.

    Only presence is checked; anything else is answered by the generic
    credential failure.
    """

    email = fields.String(required=True, validate=validate.Length(min=1, max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class RefreshTokenSchema(Schema):
    """Input payload carrying a refresh token (refresh and logout)."""

    refresh_token = fields.String(
        data_key="refreshToken", required=True, validate=validate.Length(min=1)
    )


class GoogleSignInSchema(Schema):
    """Input payload carrying a Google ID token."""

    credential = fields.String(required=True, validate=validate.Length(min=1))


class TokenResponseSchema(Schema):
    """Response payload for every successful session transition."""

    access_token = fields.String(data_key="accessToken", attribute="tokens.access_token")
    refresh_token = fields.String(data_key="refreshToken", attribute="tokens.refresh_token")
    user_id = fields.String(data_key="userId")


class GoogleSessionSchema(TokenResponseSchema):
    """Federated sign-in also reports the account email and avatar."""

    email = fields.String()
    avatar_url = fields.String(data_key="avatarUrl", allow_none=True)


class AccountSchema(Schema):
    """Public profile of an account (never includes credentials or sessions)."""

    id = fields.String(required=True)
    email = fields.String(required=True)
    name = fields.String(required=True)
    bio = fields.String(allow_none=True)
    avatar_url = fields.String(data_key="avatarUrl", allow_none=True)
