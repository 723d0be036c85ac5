"""User resource schemas."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates_schema


class ProfileUpdateSchema(Schema):
    """Partial profile update; at least one field is required."""

    name = fields.String(validate=validate.Length(min=1, max=100))
    bio = fields.String(validate=validate.Length(max=1000))
    avatar_url = fields.String(data_key="avatarUrl", validate=validate.Length(max=512))

    @validates_schema
    def require_any(self, data, **_):
        if not data:
            raise ValidationError("Provide at least one of name, bio, avatarUrl.")


class ContactSchema(Schema):
    """Name, email and picture of a user looked up by email."""

    name = fields.String(required=True)
    email = fields.String(required=True)
    avatar_url = fields.String(data_key="profilePic", allow_none=True)
