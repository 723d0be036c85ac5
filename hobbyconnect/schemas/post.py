"""Post resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, ValidationError, fields, validate, validates_schema


class PostCreateSchema(Schema):
    """Payload for creating a post. The author is taken from the access token."""

    title = fields.String(required=True, validate=validate.Length(min=1, max=200))
    content = fields.String(required=True, validate=validate.Length(min=1))
    category = fields.String(load_default=None, validate=validate.Length(min=1, max=50))
    image_url = fields.String(data_key="image", load_default=None, validate=validate.Length(max=512))


class PostUpdateSchema(Schema):
    """Partial update of a post."""

    title = fields.String(validate=validate.Length(min=1, max=200))
    content = fields.String(validate=validate.Length(min=1))
    category = fields.String(validate=validate.Length(min=1, max=50))
    image_url = fields.String(data_key="image", validate=validate.Length(max=512))

    @validates_schema
    def require_any(self, data, **_):
        if not data:
            raise ValidationError("Provide at least one field to update.")


class PostFilterSchema(Schema):
    """Supported query filters for listing posts."""

    class Meta:
        unknown = EXCLUDE

    category = fields.String(load_default=None, validate=validate.Length(min=1, max=50))


class PostSchema(Schema):
    """Public representation of a post."""

    id = fields.Integer(required=True)
    title = fields.String(required=True)
    content = fields.String(required=True)
    category = fields.String(required=True)
    image_url = fields.String(data_key="image", allow_none=True)
    author_id = fields.String(data_key="authorId", required=True)
    liked_by = fields.List(fields.String(), data_key="likedBy")
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")


class LikeToggleSchema(Schema):
    liked = fields.Boolean(required=True)
    liked_by = fields.List(fields.String(), data_key="likedBy")
