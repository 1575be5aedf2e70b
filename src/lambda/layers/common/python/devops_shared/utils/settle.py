"""Run-all, collect-all fan-out over a thread pool.

Every submitted unit settles independently: a failing unit becomes a
rejected ``Outcome`` and never cancels or fails its siblings.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, TypeVar

T = TypeVar("T")

FULFILLED = "fulfilled"
REJECTED = "rejected"


@dataclass(frozen=True)
class Outcome:
    status: str
    value: Any = None
    reason: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.status == FULFILLED

    @classmethod
    def fulfilled(cls, value: Any) -> "Outcome":
        return cls(status=FULFILLED, value=value)

    @classmethod
    def rejected(cls, reason: BaseException) -> "Outcome":
        return cls(status=REJECTED, reason=reason)


def settle(fn: Callable[[T], Any], items: Iterable[T], *, max_workers: int = 8) -> List[Outcome]:
    """Apply ``fn`` to every item concurrently and return outcomes in input order."""
    units = list(items)
    if not units:
        return []

    workers = max(1, min(max_workers, len(units)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(fn, unit) for unit in units]
        outcomes: List[Outcome] = []
        for future in futures:
            try:
                outcomes.append(Outcome.fulfilled(future.result()))
            except Exception as exc:
                outcomes.append(Outcome.rejected(exc))
    return outcomes
