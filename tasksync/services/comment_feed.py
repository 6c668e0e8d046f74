# Rev 0.1.0
from __future__ import annotations
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, List

from ..models.entities import Comment, Project
from .locator import iter_comment_owners

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def parse_timestamp(value: Any) -> datetime:
    """Comment timestamp as an aware datetime; missing/garbage sorts first."""
    if value is None or value == "":
        return _EARLIEST
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return _EARLIEST
    try:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        ts = datetime.fromisoformat(text.replace(" ", "T", 1) if "T" not in text else text)
    except (TypeError, ValueError):
        return _EARLIEST
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def aggregate_project_comments(project: Project) -> List[Comment]:
    """
    Every comment of the project tree, oldest first.

    Project-level comments are the tree's own objects; task and subtask
    comments are copies carrying the owner's title in ``context``. The
    returned list is a projection: mutate through the locator, not here.
    """
    feed: List[Comment] = []
    for kind, owner, comments in iter_comment_owners(project):
        if kind == "project":
            feed.extend(comments)
        else:
            feed.extend(replace(c, context=owner.title, context_kind=kind) for c in comments)
    # sorted() is stable: equal timestamps keep tree order
    return sorted(feed, key=lambda c: parse_timestamp(c.created_at))
