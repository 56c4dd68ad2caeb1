from grouphub.controllers.base import BaseController
from grouphub.controllers.groups import GroupController, router as group_router
from grouphub.controllers.messaging import (
    GroupMessageController,
    router as message_router,
)

__all__ = [
    "BaseController",
    "GroupController",
    "GroupMessageController",
    "group_router",
    "message_router",
]
