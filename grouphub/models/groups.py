from typing import Optional

from pydantic import Field

from grouphub.models.base import BaseModelSchema
from grouphub.utils.config import MESSAGE_MAX_LENGTH


class GroupCreate(BaseModelSchema):
    """
    Schema for creating a group.

    ``name`` is optional at the schema level so a missing name is reported by
    the group store as a validation error rather than a schema error.
    """
    name: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = Field(default=None, max_length=2000)
    topic: Optional[str] = Field(default=None, max_length=100)


class GroupMessageCreate(BaseModelSchema):
    """Schema for posting a message to a group."""
    content: Optional[str] = Field(default=None, max_length=MESSAGE_MAX_LENGTH)
