import re
from typing import Optional, Union

from grouphub.utils.config import MESSAGE_LIMIT_DEFAULT, MESSAGE_LIMIT_MAX
from grouphub.utils.errors import ValidationError

_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_limit(
    raw: Optional[Union[str, int]],
    default: int = MESSAGE_LIMIT_DEFAULT,
    maximum: int = MESSAGE_LIMIT_MAX
) -> int:
    """
    Turn a caller-supplied ``limit`` into a bounded positive integer.

    Missing or blank values fall back to ``default``; values above ``maximum``
    are clamped. Anything that is not a positive integer is rejected.
    """
    if raw is None:
        return default
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return default
        if not _INTEGER.fullmatch(raw):
            raise ValidationError("limit must be a positive integer", field="limit")
        raw = int(raw)
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValidationError("limit must be a positive integer", field="limit")
    if raw < 1:
        raise ValidationError("limit must be at least 1", field="limit")
    return min(raw, maximum)
