"""Result aggregation.

Collects CheckResults as checks complete and produces a RunReport whose
order is the declared plan order, whatever order results arrive in.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from lintgate.core.models import CheckResult, RunReport


class ResultAggregator:
    """Ordered collector for one run.

    Parameters
    ----------
    plan : Iterable[Tuple[str, str]]
        ``(profile, check)`` keys in declared order. Results for keys outside
        the plan are rejected.
    """

    def __init__(self, plan: Iterable[Tuple[str, str]]) -> None:
        self._order: Dict[Tuple[str, str], int] = {}
        for key in plan:
            self._order.setdefault(key, len(self._order))
        self._results: Dict[Tuple[str, str], CheckResult] = {}

    def add(self, result: CheckResult) -> None:
        if result.key not in self._order:
            raise KeyError(f"{result.profile}/{result.check} is not part of this run")
        if result.key in self._results:
            raise ValueError(f"{result.profile}/{result.check} was already recorded")
        self._results[result.key] = result

    def extend(self, results: Iterable[CheckResult]) -> None:
        for result in results:
            self.add(result)

    @property
    def pending(self) -> List[Tuple[str, str]]:
        return [key for key in self._order if key not in self._results]

    def report(self) -> RunReport:
        ordered = sorted(self._results.values(), key=lambda r: self._order[r.key])
        return RunReport(results=tuple(ordered))


__all__ = ["ResultAggregator"]
