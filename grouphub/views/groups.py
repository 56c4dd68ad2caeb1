from dataclasses import dataclass, field

from grouphub.views.base import BaseView


@dataclass(slots=True)
class GroupView(BaseView):
    """Single group: ``{"group": {...}}``."""
    group: dict


@dataclass(slots=True)
class GroupListView(BaseView):
    groups: list[dict] = field(default_factory=list)


@dataclass(slots=True)
class MemberView(BaseView):
    """Membership created by a join."""
    member: dict


@dataclass(slots=True)
class LeaveView(BaseView):
    ok: bool = True


@dataclass(slots=True)
class MessageView(BaseView):
    message: dict


@dataclass(slots=True)
class MessageListView(BaseView):
    """Messages of one group, oldest first."""
    messages: list[dict] = field(default_factory=list)
