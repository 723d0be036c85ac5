"""Post endpoints."""

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
    LikeToggleSchema,
    PostCreateSchema,
    PostFilterSchema,
    PostSchema,
    PostUpdateSchema,
    build_meta,
)
from hobbyconnect.services.posts.dto import PostCreateIn, PostListIn, PostUpdateIn
from hobbyconnect.services.posts.service import PostService

bp = Blueprint("posts", __name__)

post_schema = PostSchema()
posts_schema = PostSchema(many=True)
create_schema = PostCreateSchema()
update_schema = PostUpdateSchema()
filter_schema = PostFilterSchema()
like_schema = LikeToggleSchema()


@bp.get("")
@timing
def list_posts():
    """List posts newest first with ``page``/``limit`` and optional ``category``."""

    pagination = parse_pagination()
    filters = filter_schema.load(request.args)
    result = PostService().list_posts(PostListIn(pagination=pagination, category=filters["category"]))
    return json_response({"data": posts_schema.dump(result.items), "meta": build_meta(result.meta)})


@bp.get("/<int:post_id>")
@timing
def get_post(post_id: int):
    post = PostService().get_post(post_id)
    return json_response({"data": post_schema.dump(post)})


@bp.get("/user/<string:user_id>")
@require_auth
@timing
def list_user_posts(user_id: str):
    result = PostService().list_by_author(user_id, parse_pagination())
    return json_response({"data": posts_schema.dump(result.items), "meta": build_meta(result.meta)})


@bp.post("")
@require_auth
@timing
def create_post():
    data = load_json(create_schema)
    post = PostService().create_post(PostCreateIn(author_id=current_user_id(), **data))
    return json_response({"data": post_schema.dump(post)}, status=201)


@bp.put("/<int:post_id>")
@require_auth
@timing
def update_post(post_id: int):
    data = load_json(update_schema)
    post = PostService().update_post(PostUpdateIn(post_id=post_id, actor_id=current_user_id(), **data))
    return json_response({"data": post_schema.dump(post)})


@bp.delete("/<int:post_id>")
@require_auth
@timing
def delete_post(post_id: int):
    PostService().delete_post(post_id, actor_id=current_user_id())
    return "", 204


@bp.put("/<int:post_id>/like")
@require_auth
@timing
def toggle_like(post_id: int):
    """Like or unlike the post for the caller."""

    result = PostService().toggle_like(post_id, actor_id=current_user_id())
    return json_response(like_schema.dump(result))
