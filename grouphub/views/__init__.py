from grouphub.views.base import BaseView
from grouphub.views.groups import (
    GroupView,
    GroupListView,
    MemberView,
    LeaveView,
    MessageView,
    MessageListView,
)
from grouphub.views.responses import OrjsonResponse, ErrorResponse, ErrorBody, ErrorDetail

__all__ = [
    "BaseView",
    "GroupView",
    "GroupListView",
    "MemberView",
    "LeaveView",
    "MessageView",
    "MessageListView",
    "OrjsonResponse",
    "ErrorResponse",
    "ErrorBody",
    "ErrorDetail",
]
