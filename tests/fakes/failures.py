"""
Failure injection shared by the fake repositories.

Real repositories raise PersistenceError when Supabase fails; fakes can be
told to do the same for a named method so error paths can be tested.
"""
from dataclasses import dataclass
from typing import Dict, Optional

from application.exceptions import PersistenceError


@dataclass
class _Failure:
    error: PersistenceError
    after: int
    times: Optional[int]
    calls: int = 0

    def check(self) -> None:
        self.calls += 1
        if self.calls <= self.after:
            return
        if self.times is not None and self.calls > self.after + self.times:
            return
        raise self.error


class FailureInjection:
    """
    Mixin: ``fail_on("update_sets")`` makes that method raise.

    ``after`` lets that many calls succeed first and ``times`` limits how
    many calls fail before the method recovers (None: never recovers).
    Row-by-row writes check once per row, so ``after`` counts rows there.
    """

    def __init__(self) -> None:
        self._failures: Dict[str, _Failure] = {}

    def fail_on(
        self,
        method: str,
        message: str = "Simulated database failure",
        code: Optional[str] = None,
        *,
        after: int = 0,
        times: Optional[int] = None,
    ) -> None:
        self._failures[method] = _Failure(PersistenceError(message, code=code), after, times)

    def clear_failures(self) -> None:
        self._failures.clear()

    def _maybe_fail(self, method: str) -> None:
        failure = self._failures.get(method)
        if failure is not None:
            failure.check()
