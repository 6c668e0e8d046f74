# Rev 0.1.0

"""Completion guard (Rev 0.1.0)
Moving an entity into "completed" while some of its children are not
completed needs an explicit confirmation. Moving out of "completed" is
never guarded.
"""
from __future__ import annotations
from typing import Iterable

from ..models.types import STATUS_COMPLETED
from ..ui.prompter import Prompter


def count_incomplete(children: Iterable) -> int:
    return sum(1 for c in children if c.status != STATUS_COMPLETED)


def completion_message(pending: int, parent_noun: str, child_noun: str) -> str:
    plural = "" if pending == 1 else "s"
    return (
        f"This {parent_noun} has {pending} incomplete {child_noun}{plural}.\n\n"
        f"Mark it as completed anyway?"
    )


def guard_completion(
    children: Iterable,
    new_status: str,
    prompter: Prompter,
    *,
    parent_noun: str,
    child_noun: str,
) -> bool:
    """True when the transition may proceed; runs before any remote call."""
    if new_status != STATUS_COMPLETED:
        return True
    pending = count_incomplete(children)
    if pending == 0:
        return True
    return bool(prompter.confirm(completion_message(pending, parent_noun, child_noun)))
