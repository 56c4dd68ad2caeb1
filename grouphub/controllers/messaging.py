from typing import Optional
from uuid import UUID

from asyncpg import Connection
from fastapi import APIRouter, Query

from grouphub.controllers.base import BaseController
from grouphub.controllers.groups import IdentityDep
from grouphub.dependencies.database import DbConnectionDep
from grouphub.models.groups import GroupMessageCreate
from grouphub.services.messaging import GroupMessageService
from grouphub.utils.logs import ErrorLogger, ErrorLoggerDep
from grouphub.views.groups import MessageView, MessageListView


class GroupMessageController(BaseController):
    """Controller for group message operations."""

    def __init__(self, db: Connection, logger: Optional[ErrorLogger] = None):
        super().__init__(db, logger)
        self._group_message_service = GroupMessageService(db, self.logger)

    async def post_message(
        self,
        group_id: str,
        user_id: str,
        content: Optional[str]
    ) -> MessageView:
        message = await self._group_message_service.post_message(group_id, user_id, content)
        return MessageView(message=message)

    async def list_messages(self, group_id: str, limit: Optional[str] = None) -> MessageListView:
        messages = await self._group_message_service.list_messages(group_id, limit)
        return MessageListView(messages=messages)


router = APIRouter(tags=["Messages"])


@router.post(
    "/groups/{group_id}/messages",
    summary="Post group message",
    description="Append a message to a group's history."
)
async def post_group_message(
    group_id: UUID,
    user_id: IdentityDep,
    db: DbConnectionDep,
    logger: ErrorLoggerDep,
    request: Optional[GroupMessageCreate] = None,
):
    """
    Post a message to a group.

    - **group_id**: UUID of the group
    - **content**: Message text, 1-10000 characters after trimming

    The caller must be a member of the group unless membership checks are
    disabled in configuration. The server assigns the id and timestamp.
    """
    request = request or GroupMessageCreate()
    controller = GroupMessageController(db, logger)
    return await controller.post_message(str(group_id), user_id, request.content)


@router.get(
    "/groups/{group_id}/messages",
    summary="Get group messages",
    description="Get the message history for a group, oldest first."
)
async def get_group_messages(
    group_id: UUID,
    db: DbConnectionDep,
    logger: ErrorLoggerDep,
    limit: Optional[str] = Query(default=None, description="Number of messages to retrieve (1-100, default 50)"),
):
    """
    Get message history for a group.

    - **group_id**: UUID of the group
    - **limit**: Maximum number of messages; larger values are clamped,
      non-numeric or non-positive values are rejected

    Returns the earliest messages in creation order.
    """
    controller = GroupMessageController(db, logger)
    return await controller.list_messages(str(group_id), limit)
