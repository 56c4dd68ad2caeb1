from typing import Optional, List

import asyncpg
from asyncpg import Connection

from grouphub.services.base import BaseService
from grouphub.utils.errors import ConflictError, NotFoundError, ValidationError
from grouphub.utils.logs import ErrorLogger
from grouphub.utils.slugs import normalize

GROUP_COLUMNS = "id, name, slug, description, topic, owner_id, created_at"


class GroupService(BaseService):
    """Group records and their membership sets."""

    def __init__(self, db: Connection, logger: Optional[ErrorLogger] = None):
        super().__init__(db, logger)

    async def create_group(
        self,
        name: Optional[str],
        description: Optional[str],
        topic: Optional[str],
        owner_id: str
    ) -> dict:
        """
        Create a group and its owner's membership in one transaction.

        Either both rows exist afterwards or neither does.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Missing name", field="name")
        slug = normalize(name)
        if not slug.strip("-"):
            raise ValidationError("Name must contain at least one letter or digit", field="name")

        async with self.store_errors("create_group", owner_id=owner_id):
            async with self.db.transaction():
                group = await self.db.fetchrow(
                    f"""
                    INSERT INTO groups (name, slug, description, topic, owner_id)
                    VALUES ($1, $2, $3, $4, $5)
                    RETURNING {GROUP_COLUMNS}
                    """,
                    name, slug, description, topic, owner_id
                )
                await self.db.execute(
                    """
                    INSERT INTO group_members (group_id, user_id)
                    VALUES ($1, $2)
                    """,
                    group['id'], owner_id
                )

        self.logger.info("Group created", group_id=group['id'], owner_id=owner_id, slug=slug)
        return dict(group)

    async def list_groups(self) -> List[dict]:
        """All groups, newest first."""
        async with self.store_errors("list_groups"):
            rows = await self.db.fetch(
                f"SELECT {GROUP_COLUMNS} FROM groups ORDER BY created_at DESC, id"
            )
        return [dict(row) for row in rows]

    async def get_group(self, group_id: str) -> dict:
        async with self.store_errors("get_group", group_id=group_id):
            row = await self.db.fetchrow(
                f"SELECT {GROUP_COLUMNS} FROM groups WHERE id = $1::uuid",
                group_id
            )
        if row is None:
            raise NotFoundError("Group not found")
        return dict(row)

    async def group_exists(self, group_id: str) -> bool:
        async with self.store_errors("group_exists", group_id=group_id):
            return await self.db.fetchval(
                "SELECT EXISTS(SELECT 1 FROM groups WHERE id = $1::uuid)",
                group_id
            )

    async def join_group(self, group_id: str, user_id: str) -> dict:
        """
        Add ``user_id`` to the group.

        A second join by the same user raises ConflictError; the composite
        primary key on group_members is what detects it.
        """
        async with self.store_errors("join_group", group_id=group_id, user_id=user_id):
            try:
                row = await self.db.fetchrow(
                    """
                    INSERT INTO group_members (group_id, user_id)
                    VALUES ($1::uuid, $2)
                    RETURNING group_id, user_id, joined_at
                    """,
                    group_id, user_id
                )
            except asyncpg.UniqueViolationError:
                raise ConflictError("Already a member of this group")
            except asyncpg.ForeignKeyViolationError:
                raise NotFoundError("Group not found")

        self.logger.info("Member joined", group_id=group_id, user_id=user_id)
        return dict(row)

    async def leave_group(self, group_id: str, user_id: str) -> bool:
        """
        Remove ``user_id`` from the group.

        Leaving a group you are not in is a no-op. The owner cannot leave,
        since every group keeps its owner as a member.
        Returns True when a membership row was removed.
        """
        async with self.store_errors("leave_group", group_id=group_id, user_id=user_id):
            owner_id = await self.db.fetchval(
                "SELECT owner_id FROM groups WHERE id = $1::uuid",
                group_id
            )
            if owner_id is not None and owner_id == user_id:
                raise ConflictError("Group owner cannot leave the group")

            result = await self.db.execute(
                """
                DELETE FROM group_members
                WHERE group_id = $1::uuid AND user_id = $2
                """,
                group_id, user_id
            )

        removed = result.split()[-1] != "0"
        if removed:
            self.logger.info("Member left", group_id=group_id, user_id=user_id)
        return removed

    async def list_my_groups(self, user_id: str) -> List[dict]:
        """Groups ``user_id`` belongs to, each annotated with its joined_at."""
        async with self.store_errors("list_my_groups", user_id=user_id):
            rows = await self.db.fetch(
                """
                SELECT gm.group_id, gm.joined_at,
                       g.id, g.name, g.slug, g.description, g.topic
                FROM group_members gm
                JOIN groups g ON g.id = gm.group_id
                WHERE gm.user_id = $1
                ORDER BY gm.joined_at DESC, g.id
                """,
                user_id
            )
        return [dict(row) for row in rows]

    async def is_member(self, group_id: str, user_id: str, lock: bool = False) -> bool:
        """
        Check if user is a member of the group.

        With ``lock`` the membership row is share-locked until the surrounding
        transaction ends, so a concurrent leave waits for it.
        """
        query = """
            SELECT 1 FROM group_members
            WHERE group_id = $1::uuid AND user_id = $2
        """
        if lock:
            query += " FOR SHARE"
        async with self.store_errors("is_member", group_id=group_id, user_id=user_id):
            result = await self.db.fetchval(query, group_id, user_id)
        return result is not None
