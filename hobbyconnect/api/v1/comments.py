"""Comment endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from hobbyconnect.api.deps import (
    current_user_id,
    json_response,
    load_json,
    parse_pagination,
    require_auth,
    timing,
)
from hobbyconnect.schemas import (
    CommentCreateSchema,
    CommentFilterSchema,
    CommentSchema,
    CommentUpdateSchema,
    build_meta,
)
from hobbyconnect.services.comments.dto import CommentCreateIn, CommentListIn, CommentUpdateIn
from hobbyconnect.services.comments.service import CommentService

bp = Blueprint("comments", __name__)

comment_schema = CommentSchema()
comments_schema = CommentSchema(many=True)
create_schema = CommentCreateSchema()
update_schema = CommentUpdateSchema()
filter_schema = CommentFilterSchema()


def _listing(post_id: int | None):
    pagination = parse_pagination(default_limit=50, max_limit=200)
    result = CommentService().list_comments(CommentListIn(pagination=pagination, post_id=post_id))
    return json_response({"data": comments_schema.dump(result.items), "meta": build_meta(result.meta)})


@bp.get("")
@timing
def list_comments():
    """List comments, optionally filtered with ``?postId=``."""

    filters = filter_schema.load(request.args)
    return _listing(filters["post_id"])


@bp.get("/post/<int:post_id>")
@timing
def list_post_comments(post_id: int):
    return _listing(post_id)


@bp.get("/<int:comment_id>")
@timing
def get_comment(comment_id: int):
    comment = CommentService().get_comment(comment_id)
    return json_response({"data": comment_schema.dump(comment)})


@bp.post("")
@require_auth
@timing
def create_comment():
    data = load_json(create_schema)
    comment = CommentService().create_comment(CommentCreateIn(author_id=current_user_id(), **data))
    return json_response({"data": comment_schema.dump(comment)}, status=201)


@bp.put("/<int:comment_id>")
@require_auth
@timing
def update_comment(comment_id: int):
    data = load_json(update_schema)
    comment = CommentService().update_comment(
        CommentUpdateIn(comment_id=comment_id, actor_id=current_user_id(), **data)
    )
    return json_response({"data": comment_schema.dump(comment)})


@bp.delete("/<int:comment_id>")
@require_auth
@timing
def delete_comment(comment_id: int):
    CommentService().delete_comment(comment_id, actor_id=current_user_id())
    return "", 204
