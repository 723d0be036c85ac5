# hobbyconnect/services/_shared/base.py
from __future__ import annotations

from collections.abc import Iterable

from hobbyconnect.repositories.base import Pagination
from hobbyconnect.services._shared.dto import PageMeta
from hobbyconnect.services._shared.errors import ForbiddenError
from hobbyconnect.services._shared.policies.common import is_owner
from hobbyconnect.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


class BaseService:
    """
    Base class for the content services (posts, comments).

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Offer shared pagination helpers.
    * Centralize the ownership policy.

    Notes
    -----
    - Services never touch the global session; always use a Unit of Work.
    - Services raise ``_shared.errors`` exceptions; HTTP mapping lives in ``core.errors``.
    """

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork()

    # ----------------------- Pagination utilities ---------------------------

    def ensure_pagination(
        self, *, page: int, limit: int, sort: Iterable[str] | None = None
    ) -> Pagination:
        """
        Build a Pagination value object with basic clamping.

        :param page: 1-based page number.
        :param limit: Page size.
        :param sort: Sort tokens like ``["-created_at", "title"]``.
        :rtype: Pagination
        """
        page = max(1, int(page))
        limit = max(1, int(limit))
        return Pagination(page=page, limit=limit, sort=list(sort or []))

    @staticmethod
    def page_meta(*, page: int, limit: int, total: int) -> PageMeta:
        return PageMeta(
            page=page,
            limit=limit,
            total=total,
            has_prev=page > 1,
            has_next=page * limit < total,
        )

    # --------------------------- AuthZ --------------------------------------

    def ensure_owner(self, actor_id: str | None, owner_id: str, *, msg: str | None = None) -> None:
        """
        Ensure the current actor owns the resource.

        :param actor_id: Authenticated user id.
        :param owner_id: Author of the resource.
        :param msg: Optional custom error message.
        :raises ForbiddenError: If the actor is not the owner.
        """
        if not is_owner(actor_id=actor_id, owner_id=owner_id):
            raise ForbiddenError(msg or "You can only modify your own content.")
