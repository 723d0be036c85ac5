"""
CommentService
==============

Comments on posts. Creating a comment requires the post to exist; only the
author may edit or delete a comment.
"""

from __future__ import annotations

import logging

from hobbyconnect.models.comment import Comment
from hobbyconnect.services._shared.base import BaseService
from hobbyconnect.services._shared.errors import NotFoundError
from hobbyconnect.services.comments.dto import (
    CommentCreateIn,
    CommentListIn,
    CommentListOut,
    CommentOut,
    CommentUpdateIn,
)

log = logging.getLogger(__name__)


def to_comment_out(comment: Comment) -> CommentOut:
    return CommentOut(
        id=comment.id,
        post_id=comment.post_id,
        author_id=comment.author_id,
        content=comment.content,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )


class CommentService(BaseService):
    """Application service for the ``Comment`` entity."""

    def list_comments(self, dto: CommentListIn) -> CommentListOut:
        """
        List comments oldest first, optionally for a single post.

        :raises NotFoundError: If ``dto.post_id`` names an unknown post.
        """
        pagination = self.ensure_pagination(
            page=dto.pagination.page, limit=dto.pagination.limit, sort=dto.pagination.sort
        )
        with self.ro_uow() as uow:
            if dto.post_id is not None and uow.posts.get(dto.post_id) is None:
                raise NotFoundError("Post", dto.post_id)
            page = uow.comments.list_comments(pagination, post_id=dto.post_id)
            items = [to_comment_out(c) for c in page.items]
        return CommentListOut(
            items=items,
            meta=self.page_meta(page=page.page, limit=page.limit, total=page.total),
        )

    def get_comment(self, comment_id: int) -> CommentOut:
        with self.ro_uow() as uow:
            comment = uow.comments.get(comment_id)
            if comment is None:
                raise NotFoundError("Comment", comment_id)
            return to_comment_out(comment)

    def create_comment(self, dto: CommentCreateIn) -> CommentOut:
        """
        Attach a comment to an existing post.

        :raises NotFoundError: If the post does not exist.
        """
        with self.rw_uow() as uow:
            if uow.posts.get(dto.post_id) is None:
                raise NotFoundError("Post", dto.post_id)
            comment = uow.comments.add(
                Comment(post_id=dto.post_id, author_id=dto.author_id, content=dto.content)
            )
            uow.session.refresh(comment)
            out = to_comment_out(comment)
        log.info("comment.created", extra={"event": "comment.created", "user_id": dto.author_id})
        return out

    def update_comment(self, dto: CommentUpdateIn) -> CommentOut:
        """
        :raises NotFoundError: If the comment does not exist.
        :raises ForbiddenError: If the actor is not the author.
        """
        with self.rw_uow() as uow:
            comment = uow.comments.get(dto.comment_id)
            if comment is None:
                raise NotFoundError("Comment", dto.comment_id)
            self.ensure_owner(dto.actor_id, comment.author_id)
            uow.comments.update(comment, content=dto.content)
            uow.session.refresh(comment)
            return to_comment_out(comment)

    def delete_comment(self, comment_id: int, *, actor_id: str) -> None:
        with self.rw_uow() as uow:
            comment = uow.comments.get(comment_id)
            if comment is None:
                raise NotFoundError("Comment", comment_id)
            self.ensure_owner(actor_id, comment.author_id)
            uow.comments.delete(comment)
