"""Tests for the message store."""

import asyncpg
import pytest

from grouphub.services.messaging import GroupMessageService
from grouphub.utils.errors import ForbiddenError, NotFoundError, ValidationError
from tests.conftest import GROUP_ID, OWNER_ID, make_message_row


class TestPostMessage:
    @pytest.mark.asyncio
    async def test_member_can_post(self, db, transaction) -> None:
        db.fetchval.side_effect = [True, 1]
        db.fetchrow.return_value = make_message_row("hello")
        service = GroupMessageService(db, require_membership=True)

        message = await service.post_message(str(GROUP_ID), OWNER_ID, "  hello  ")

        assert message["content"] == "hello"
        assert db.fetchrow.await_args.args[1:] == (str(GROUP_ID), OWNER_ID, "hello")
        assert transaction.committed

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [None, "", "   \n"])
    async def test_missing_content(self, db, content) -> None:
        service = GroupMessageService(db)
        with pytest.raises(ValidationError, match="Missing content"):
            await service.post_message(str(GROUP_ID), OWNER_ID, content)
        db.transaction.assert_not_called()

    @pytest.mark.asyncio
    async def test_content_too_long(self, db) -> None:
        service = GroupMessageService(db)
        with pytest.raises(ValidationError):
            await service.post_message(str(GROUP_ID), OWNER_ID, "x" * 10001)

    @pytest.mark.asyncio
    async def test_non_member_is_rejected(self, db, transaction) -> None:
        db.fetchval.side_effect = [True, None]
        service = GroupMessageService(db, require_membership=True)

        with pytest.raises(ForbiddenError):
            await service.post_message(str(GROUP_ID), "stranger", "hi")

        db.fetchrow.assert_not_awaited()
        assert transaction.rolled_back

    @pytest.mark.asyncio
    async def test_unknown_group(self, db) -> None:
        db.fetchval.side_effect = [False]
        service = GroupMessageService(db, require_membership=True)

        with pytest.raises(NotFoundError):
            await service.post_message(str(GROUP_ID), OWNER_ID, "hi")

    @pytest.mark.asyncio
    async def test_open_posting_skips_membership_check(self, db) -> None:
        db.fetchrow.return_value = make_message_row("hi", user_id="stranger")
        service = GroupMessageService(db, require_membership=False)

        message = await service.post_message(str(GROUP_ID), "stranger", "hi")

        assert message["user_id"] == "stranger"
        db.fetchval.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_open_posting_unknown_group(self, db) -> None:
        db.fetchrow.side_effect = asyncpg.ForeignKeyViolationError("violates foreign key constraint")
        service = GroupMessageService(db, require_membership=False)

        with pytest.raises(NotFoundError):
            await service.post_message(str(GROUP_ID), "stranger", "hi")


class TestListMessages:
    @pytest.mark.asyncio
    async def test_messages_come_back_in_store_order(self, db) -> None:
        db.fetchval.return_value = True
        db.fetch.return_value = [make_message_row("m1"), make_message_row("m2"), make_message_row("m3")]
        service = GroupMessageService(db)

        messages = await service.list_messages(str(GROUP_ID))

        assert [m["content"] for m in messages] == ["m1", "m2", "m3"]
        query, group_id, limit = db.fetch.await_args.args
        assert "ORDER BY created_at ASC, seq ASC" in query
        assert group_id == str(GROUP_ID)
        assert limit == 50

    @pytest.mark.asyncio
    async def test_limit_is_passed_through(self, db) -> None:
        db.fetchval.return_value = True
        service = GroupMessageService(db)

        await service.list_messages(str(GROUP_ID), "2")

        assert db.fetch.await_args.args[2] == 2

    @pytest.mark.asyncio
    async def test_limit_is_clamped(self, db) -> None:
        db.fetchval.return_value = True
        service = GroupMessageService(db)

        await service.list_messages(str(GROUP_ID), "100000")

        assert db.fetch.await_args.args[2] == 100

    @pytest.mark.asyncio
    async def test_bad_limit_is_rejected_before_querying(self, db) -> None:
        service = GroupMessageService(db)

        with pytest.raises(ValidationError):
            await service.list_messages(str(GROUP_ID), "lots")

        db.fetchval.assert_not_awaited()
        db.fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_group(self, db) -> None:
        db.fetchval.return_value = False
        service = GroupMessageService(db)

        with pytest.raises(NotFoundError):
            await service.list_messages(str(GROUP_ID))
        db.fetch.assert_not_awaited()
