"""
PostService
===========

Application service for posts and likes:

- List posts newest first, optionally filtered by category.
- Create posts on behalf of the authenticated user.
- Update and delete posts (author only).
- Toggle the caller's like on a post.

Read operations use ``ro_uow()``; write operations use ``rw_uow()``.
"""

from __future__ import annotations

import logging

from hobbyconnect.models.post import DEFAULT_CATEGORY, Post
from hobbyconnect.services._shared.base import BaseService
from hobbyconnect.services._shared.dto import PaginationIn
from hobbyconnect.services._shared.errors import NotFoundError
from hobbyconnect.services.posts.dto import (
    LikeToggleOut,
    PostCreateIn,
    PostListIn,
    PostListOut,
    PostOut,
    PostUpdateIn,
)

log = logging.getLogger(__name__)


def to_post_out(post: Post) -> PostOut:
    return PostOut(
        id=post.id,
        title=post.title,
        content=post.content,
        category=post.category,
        image_url=post.image_url,
        author_id=post.author_id,
        liked_by=[like.user_id for like in post.likes],
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


class PostService(BaseService):
    """Orchestrates post use cases over the post repository."""

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def list_posts(self, dto: PostListIn) -> PostListOut:
        """
        Return one page of posts, newest first.

        :param dto: Pagination and optional category filter.
        :rtype: :class:`PostListOut`
        """
        pagination = self.ensure_pagination(
            page=dto.pagination.page, limit=dto.pagination.limit, sort=dto.pagination.sort
        )
        with self.ro_uow() as uow:
            page = uow.posts.list_posts(pagination, category=dto.category)
            items = [to_post_out(p) for p in page.items]
        return PostListOut(
            items=items,
            meta=self.page_meta(page=page.page, limit=page.limit, total=page.total),
        )

    def list_by_author(self, author_id: str, pagination: PaginationIn | None = None) -> PostListOut:
        pagination = pagination or PaginationIn()
        pg = self.ensure_pagination(page=pagination.page, limit=pagination.limit, sort=pagination.sort)
        with self.ro_uow() as uow:
            page = uow.posts.list_by_author(author_id, pg)
            items = [to_post_out(p) for p in page.items]
        return PostListOut(
            items=items,
            meta=self.page_meta(page=page.page, limit=page.limit, total=page.total),
        )

    def get_post(self, post_id: int) -> PostOut:
        """
        :raises NotFoundError: If the post does not exist.
        """
        with self.ro_uow() as uow:
            post = uow.posts.get(post_id)
            if post is None:
                raise NotFoundError("Post", post_id)
            return to_post_out(post)

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def create_post(self, dto: PostCreateIn) -> PostOut:
        with self.rw_uow() as uow:
            post = uow.posts.add(
                Post(
                    title=dto.title,
                    content=dto.content,
                    category=dto.category or DEFAULT_CATEGORY,
                    image_url=dto.image_url,
                    author_id=dto.author_id,
                )
            )
            uow.session.refresh(post)
            out = to_post_out(post)
        log.info("post.created", extra={"event": "post.created", "user_id": dto.author_id})
        return out

    def update_post(self, dto: PostUpdateIn) -> PostOut:
        """
        Update a post owned by ``dto.actor_id``.

        :raises NotFoundError: If the post does not exist.
        :raises ForbiddenError: If the actor is not the author.
        """
        with self.rw_uow() as uow:
            post = uow.posts.get(dto.post_id)
            if post is None:
                raise NotFoundError("Post", dto.post_id)
            self.ensure_owner(dto.actor_id, post.author_id)
            uow.posts.update(
                post,
                title=dto.title,
                content=dto.content,
                category=dto.category,
                image_url=dto.image_url,
            )
            uow.session.refresh(post)
            return to_post_out(post)

    def delete_post(self, post_id: int, *, actor_id: str) -> None:
        """
        :raises NotFoundError: If the post does not exist.
        :raises ForbiddenError: If the actor is not the author.
        """
        with self.rw_uow() as uow:
            post = uow.posts.get(post_id)
            if post is None:
                raise NotFoundError("Post", post_id)
            self.ensure_owner(actor_id, post.author_id)
            uow.posts.delete(post)
        log.info("post.deleted", extra={"event": "post.deleted", "user_id": actor_id})

    def toggle_like(self, post_id: int, *, actor_id: str) -> LikeToggleOut:
        """
        Like the post if the actor has not liked it yet, otherwise unlike it.

        :raises NotFoundError: If the post does not exist.
        """
        with self.rw_uow() as uow:
            post = uow.posts.get(post_id)
            if post is None:
                raise NotFoundError("Post", post_id)
            like = uow.posts.get_like(post.id, actor_id)
            if like is None:
                uow.posts.add_like(post, actor_id)
                liked = True
            else:
                uow.posts.remove_like(post, like)
                liked = False
            return LikeToggleOut(liked=liked, liked_by=[lk.user_id for lk in post.likes])
