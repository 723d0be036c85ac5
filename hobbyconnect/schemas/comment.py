"""Comment resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class CommentCreateSchema(Schema):
    post_id = fields.Integer(data_key="postId", required=True, validate=validate.Range(min=1))
    content = fields.String(required=True, validate=validate.Length(min=1, max=2000))


class CommentUpdateSchema(Schema):
    content = fields.String(required=True, validate=validate.Length(min=1, max=2000))


class CommentFilterSchema(Schema):
    """Supported query filters for listing comments."""

    class Meta:
        unknown = EXCLUDE

    post_id = fields.Integer(data_key="postId", load_default=None, validate=validate.Range(min=1))


class CommentSchema(Schema):
    """Public representation of a comment."""

    id = fields.Integer(required=True)
    post_id = fields.Integer(data_key="postId", required=True)
    author_id = fields.String(data_key="authorId", required=True)
    content = fields.String(required=True)
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")
