from typing import Optional, Annotated
from uuid import UUID

from asyncpg import Connection
from fastapi import APIRouter, Depends

from grouphub.controllers.base import BaseController
from grouphub.dependencies.database import DbConnectionDep
from grouphub.models.groups import GroupCreate
from grouphub.services.groups import GroupService
from grouphub.utils.identity import get_current_identity
from grouphub.utils.logs import ErrorLogger, ErrorLoggerDep
from grouphub.views.groups import GroupView, GroupListView, MemberView, LeaveView


class GroupController(BaseController):
    """Controller for group and membership operations."""

    def __init__(self, db: Connection, logger: Optional[ErrorLogger] = None):
        super().__init__(db, logger)
        self._group_service = GroupService(db, self.logger)

    async def create_group(
        self,
        owner_id: str,
        name: Optional[str],
        description: Optional[str] = None,
        topic: Optional[str] = None
    ) -> GroupView:
        group = await self._group_service.create_group(
            name=name,
            description=description,
            topic=topic,
            owner_id=owner_id
        )
        return GroupView(group=group)

    async def list_groups(self) -> GroupListView:
        return GroupListView(groups=await self._group_service.list_groups())

    async def get_group(self, group_id: str) -> GroupView:
        return GroupView(group=await self._group_service.get_group(group_id))

    async def join_group(self, group_id: str, user_id: str) -> MemberView:
        member = await self._group_service.join_group(group_id, user_id)
        return MemberView(member=member)

    async def leave_group(self, group_id: str, user_id: str) -> LeaveView:
        await self._group_service.leave_group(group_id, user_id)
        return LeaveView(ok=True)

    async def list_my_groups(self, user_id: str) -> GroupListView:
        return GroupListView(groups=await self._group_service.list_my_groups(user_id))


router = APIRouter(tags=["Groups"])

IdentityDep = Annotated[str, Depends(get_current_identity)]


@router.post(
    "/groups",
    summary="Create group",
    description="Create a group owned by the caller. The owner becomes its first member."
)
async def create_group(
    user_id: IdentityDep,
    db: DbConnectionDep,
    logger: ErrorLoggerDep,
    request: Optional[GroupCreate] = None,
):
    """
    Create a new group.

    - **name**: Display name; the slug is derived from it
    - **description**: Optional free text
    - **topic**: Optional topic label

    Group and owner membership are written in a single transaction.
    """
    request = request or GroupCreate()
    controller = GroupController(db, logger)
    return await controller.create_group(
        owner_id=user_id,
        name=request.name,
        description=request.description,
        topic=request.topic
    )


@router.get(
    "/groups",
    summary="List groups",
    description="List every group, newest first."
)
async def list_groups(db: DbConnectionDep, logger: ErrorLoggerDep):
    controller = GroupController(db, logger)
    return await controller.list_groups()


@router.get(
    "/groups/{group_id}",
    summary="Get group details"
)
async def get_group(group_id: UUID, db: DbConnectionDep, logger: ErrorLoggerDep):
    """
    Get a single group.

    - **group_id**: UUID of the group

    Returns 404 when the group does not exist.
    """
    controller = GroupController(db, logger)
    return await controller.get_group(str(group_id))


@router.post(
    "/groups/{group_id}/join",
    summary="Join group",
    description="Add the caller to a group. Joining twice is rejected."
)
async def join_group(
    group_id: UUID,
    user_id: IdentityDep,
    db: DbConnectionDep,
    logger: ErrorLoggerDep,
):
    controller = GroupController(db, logger)
    return await controller.join_group(str(group_id), user_id)


@router.post(
    "/groups/{group_id}/leave",
    summary="Leave group",
    description="Remove the caller from a group. Leaving a group you are not in is a no-op."
)
async def leave_group(
    group_id: UUID,
    user_id: IdentityDep,
    db: DbConnectionDep,
    logger: ErrorLoggerDep,
):
    controller = GroupController(db, logger)
    return await controller.leave_group(str(group_id), user_id)


@router.get(
    "/my-groups",
    summary="Get my groups",
    description="Get all groups the caller is a member of."
)
async def get_my_groups(user_id: IdentityDep, db: DbConnectionDep, logger: ErrorLoggerDep):
    """
    Get all groups the caller belongs to.

    Each entry carries `group_id`, `joined_at` and the group's
    `id`, `name`, `slug`, `description` and `topic`.
    """
    controller = GroupController(db, logger)
    return await controller.list_my_groups(user_id)
