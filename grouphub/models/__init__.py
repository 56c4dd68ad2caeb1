from grouphub.models.base import BaseModelSchema
from grouphub.models.groups import GroupCreate, GroupMessageCreate

__all__ = [
    "BaseModelSchema",
    "GroupCreate",
    "GroupMessageCreate",
]
