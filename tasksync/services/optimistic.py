# Rev 0.1.0

"""Optimistic mutation service (Rev 0.1.0)

One generic apply → confirm → revert operation. Callers instantiate it per
field family by passing a getter/setter pair and the remote call:

    getter, setter = attrs(task, "start_date", "due_date")
    await mutator.update(key=("task", task.id, "details"), getter=getter,
                         setter=setter, value=(start, due),
                         remote=lambda: repo.update_task(task.id, ...),
                         label="task")

Apply happens synchronously before the first suspension point, so the
local tree reflects the new value as soon as the coroutine starts.
"""
from __future__ import annotations
import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Hashable, Optional, Set, Tuple

from ..errors import SessionExpiredError
from ..models.payloads import from_wire
from ..ui.prompter import Prompter
from ..utils.logging_setup import get_logger

# result codes
APPLIED = "applied"
REVERTED = "reverted"
SKIPPED = "skipped"
DECLINED = "declined"
NOT_FOUND = "not_found"
FAILED = "failed"
CANCELLED = "cancelled"

Getter = Callable[[], Any]
Setter = Callable[[Any], None]
Remote = Callable[[], Awaitable[Any]]


@dataclass(frozen=True)
class MutationResult:
    ok: bool
    code: str
    message: Optional[str] = None
    value: Any = None

    @classmethod
    def applied(cls, value: Any = None) -> "MutationResult":
        return cls(True, APPLIED, value=value)

    @classmethod
    def skipped(cls, message: str = "empty input") -> "MutationResult":
        return cls(False, SKIPPED, message)

    @classmethod
    def declined(cls) -> "MutationResult":
        return cls(False, DECLINED, "declined by user")

    @classmethod
    def not_found(cls) -> "MutationResult":
        return cls(False, NOT_FOUND, "entity not found")


def attrs(entity: Any, *names: str) -> Tuple[Getter, Setter]:
    """Getter/setter over one attribute (plain value) or several (tuple)."""
    if len(names) == 1:
        name = names[0]
        return (lambda: getattr(entity, name)), (lambda v: setattr(entity, name, v))

    def getter() -> Tuple[Any, ...]:
        return tuple(getattr(entity, n) for n in names)

    def setter(values: Tuple[Any, ...]) -> None:
        for n, v in zip(names, values):
            setattr(entity, n, v)

    return getter, setter


def merge_fields(entity: Any, *names: str) -> Callable[[Any], None]:
    """Copy the named fields from a server payload onto the entity, when present."""
    def merge(server: Any) -> None:
        if isinstance(server, dict):
            for name, value in from_wire(server, names).items():
                setattr(entity, name, value)
    return merge


@dataclass(eq=False)
class _InFlight:
    task: "asyncio.Future[Any]"
    snapshot: Any = None
    abandoned: bool = False


@dataclass
class OptimisticMutator:
    """
    Runs remote calls as asyncio tasks so they can be cancelled.

    cancel_superseded: a newer update with the same key cancels the older
    in-flight call and inherits its snapshot; a failure then restores the
    last confirmed value. When off, overlapping updates race and an older
    failure can clobber a newer success.
    """
    prompter: Prompter
    cancel_superseded: bool = True
    _latest: Dict[Hashable, _InFlight] = field(default_factory=dict, init=False, repr=False)
    _running: Set[_InFlight] = field(default_factory=set, init=False, repr=False)

    def __post_init__(self):
        self._log = get_logger("OptimisticMutator")

    # ---- public ----
    def in_flight(self, key: Optional[Hashable] = None) -> int:
        if key is None:
            return len(self._running)
        return 1 if key in self._latest else 0

    def cancel_all(self) -> None:
        """Abandon every in-flight call (view teardown). Nothing is rolled back."""
        for entry in list(self._running):
            entry.abandoned = True
            entry.task.cancel()

    async def update(
        self,
        *,
        key: Hashable,
        getter: Getter,
        setter: Setter,
        value: Any,
        remote: Remote,
        label: str,
        merge: Optional[Callable[[Any], None]] = None,
    ) -> MutationResult:
        prior = self._latest.get(key) if self.cancel_superseded else None
        if prior is not None:
            prior.abandoned = True
            if self._confirmed(prior.task):
                snapshot = getter()
            else:
                snapshot = prior.snapshot
                prior.task.cancel()
            self._log.debug("Superseded in-flight update %s", key)
        else:
            snapshot = getter()

        setter(value)
        entry = self._start(remote, snapshot)
        self._latest[key] = entry
        try:
            server = await entry.task
        except asyncio.CancelledError:
            if not entry.abandoned:
                raise
            return MutationResult(False, CANCELLED, f"{label} update superseded")
        except Exception as exc:
            if entry.abandoned:
                # the superseding update owns the snapshot now
                self._log.warning("Superseded %s update failed: %s", label, exc)
                return MutationResult(False, CANCELLED, str(exc))
            setter(snapshot)
            self._report(f"Could not update {label}.", exc)
            return MutationResult(False, REVERTED, str(exc))
        finally:
            self._finish(entry, key)

        if entry.abandoned:
            # confirmed, but a newer update already owns the field
            return MutationResult(False, CANCELLED, f"{label} update superseded")
        if merge is not None and server:
            merge(server)
        return MutationResult.applied(server)

    async def call(self, remote: Remote, *, notice: str) -> MutationResult:
        """Single remote call for create/delete paths: no local state to restore."""
        entry = self._start(remote, None)
        try:
            value = await entry.task
        except asyncio.CancelledError:
            if not entry.abandoned:
                raise
            return MutationResult(False, CANCELLED, "abandoned")
        except Exception as exc:
            self._report(notice, exc)
            return MutationResult(False, FAILED, str(exc))
        finally:
            self._finish(entry)
        return MutationResult.applied(value)

    # ---- internals ----
    def _start(self, remote: Remote, snapshot: Any) -> _InFlight:
        entry = _InFlight(asyncio.ensure_future(remote()), snapshot)
        self._running.add(entry)
        return entry

    @staticmethod
    def _confirmed(task: "asyncio.Future[Any]") -> bool:
        return task.done() and not task.cancelled() and task.exception() is None

    def _finish(self, entry: _InFlight, key: Optional[Hashable] = None) -> None:
        self._running.discard(entry)
        if key is not None and self._latest.get(key) is entry:
            del self._latest[key]

    def _report(self, notice: str, exc: BaseException) -> None:
        self._log.error("%s (%s: %s)", notice, type(exc).__name__, exc)
        # on 401 the session owner already drives the user back to login
        if not isinstance(exc, SessionExpiredError):
            self.prompter.notify(notice)
