from grouphub.services.base import BaseService
from grouphub.services.groups import GroupService
from grouphub.services.messaging import GroupMessageService

__all__ = [
    "BaseService",
    "GroupService",
    "GroupMessageService",
]
