from typing import Optional, List, Union

import asyncpg
from asyncpg import Connection

from grouphub.services.base import BaseService
from grouphub.services.groups import GroupService
from grouphub.utils import config
from grouphub.utils.errors import ForbiddenError, NotFoundError, ValidationError
from grouphub.utils.logs import ErrorLogger
from grouphub.utils.pagination import parse_limit


class GroupMessageService(BaseService):
    """
    Ordered, immutable messages scoped to a group.

    Order is ``created_at`` then the store-assigned ``seq``, so it stays
    total even when two inserts share a timestamp.
    """

    def __init__(
        self,
        db: Connection,
        logger: Optional[ErrorLogger] = None,
        require_membership: Optional[bool] = None
    ):
        super().__init__(db, logger)
        self._groups = GroupService(db, self.logger)
        if require_membership is None:
            require_membership = config.REQUIRE_MEMBERSHIP_TO_POST
        self._require_membership = require_membership

    async def post_message(self, group_id: str, user_id: str, content: Optional[str]) -> dict:
        """Append a message; the server assigns id, created_at and order."""
        content = (content or "").strip()
        if not content:
            raise ValidationError("Missing content", field="content")
        if len(content) > config.MESSAGE_MAX_LENGTH:
            raise ValidationError(
                f"Content exceeds {config.MESSAGE_MAX_LENGTH} characters", field="content"
            )

        async with self.store_errors("post_message", group_id=group_id, user_id=user_id):
            async with self.db.transaction():
                if self._require_membership:
                    if not await self._groups.group_exists(group_id):
                        raise NotFoundError("Group not found")
                    if not await self._groups.is_member(group_id, user_id, lock=True):
                        raise ForbiddenError("You are not a member of this group")
                try:
                    row = await self.db.fetchrow(
                        """
                        INSERT INTO group_messages (group_id, user_id, content)
                        VALUES ($1::uuid, $2, $3)
                        RETURNING id, group_id, user_id, content, created_at
                        """,
                        group_id, user_id, content
                    )
                except asyncpg.ForeignKeyViolationError:
                    raise NotFoundError("Group not found")

        self.logger.debug("Message posted", group_id=group_id, message_id=row['id'])
        return dict(row)

    async def list_messages(
        self,
        group_id: str,
        limit: Optional[Union[str, int]] = None
    ) -> List[dict]:
        """The earliest ``limit`` messages of the group, oldest first."""
        limit = parse_limit(limit)
        if not await self._groups.group_exists(group_id):
            raise NotFoundError("Group not found")

        async with self.store_errors("list_messages", group_id=group_id):
            rows = await self.db.fetch(
                """
                SELECT id, user_id, content, created_at
                FROM group_messages
                WHERE group_id = $1::uuid
                ORDER BY created_at ASC, seq ASC
                LIMIT $2
                """,
                group_id, limit
            )
        return [dict(row) for row in rows]
