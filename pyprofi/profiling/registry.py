"""Per-function accounting records and the registry that owns them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterator, List, Optional

from pyprofi.profiling.identity import FunctionIdentity


@dataclass
class FunctionReport:
    """Accumulated timing and call count for one function.

    Only the outermost activation of a function arms the timer, so recursive
    calls are counted individually but their time is measured once, from the
    outermost entry to the outermost exit.

    Attributes:
        identity: Resolved function identity.
        call_count: Completed call/return pairs.
        duration: Total seconds across completed outermost activations.
        last_duration: Seconds taken by the most recent outermost activation.
        started_at: Clock reading at the outermost in-flight entry, or None
            when the function is idle.
        depth: Number of in-flight activations.
        unmatched_returns: Returns seen with no activation in flight, e.g.
            when hooks were armed mid-call.
    """

    identity: FunctionIdentity
    call_count: int = 0
    duration: float = 0.0
    last_duration: float = 0.0
    started_at: Optional[float] = None
    depth: int = 0
    unmatched_returns: int = 0
    _title: Optional[str] = field(default=None, repr=False, compare=False)

    @property
    def title(self) -> str:
        if self._title is None:
            self._title = self.identity.title
        return self._title

    @property
    def running(self) -> bool:
        return self.depth > 0

    def enter(self, now: float) -> None:
        if self.depth == 0:
            self.started_at = now
        self.depth += 1

    def exit(self, now: float) -> None:
        if self.depth == 0:
            self.unmatched_returns += 1
            return
        self.depth -= 1
        self.call_count += 1
        if self.depth == 0:
            self.last_duration = now - self.started_at
            self.duration += self.last_duration
            self.started_at = None


def identity_key(identity: FunctionIdentity) -> Hashable:
    """Key reports by the full, untruncated identity."""
    return identity


def title_key(identity: FunctionIdentity) -> Hashable:
    """Key reports by display title, merging identities whose truncated fields collide."""
    return identity.title


class ReportRegistry:
    """Maps function identities to their reports, preserving first-seen order.

    The lookup mapping and the ordered ``reports`` list are kept separately so
    the list can be sorted in place without disturbing lookups. Not safe for
    concurrent mutation from several threads.
    """

    def __init__(self, merge_truncated_titles: bool = False) -> None:
        """Initialize an empty registry.

        Args:
            merge_truncated_titles: Key reports by their fixed-width title
                instead of the full identity, so two functions whose truncated
                source/name fields collide share one report.
        """
        self._key = title_key if merge_truncated_titles else identity_key
        self._by_key: Dict[Hashable, FunctionReport] = {}
        self.reports: List[FunctionReport] = []

    def get_or_create(self, identity: FunctionIdentity) -> FunctionReport:
        key = self._key(identity)
        report = self._by_key.get(key)
        if report is None:
            report = FunctionReport(identity=identity)
            self._by_key[key] = report
            self.reports.append(report)
        return report

    def get(self, identity: FunctionIdentity) -> Optional[FunctionReport]:
        return self._by_key.get(self._key(identity))

    def reset(self) -> None:
        """Drop every report."""
        self._by_key.clear()
        self.reports.clear()

    def __len__(self) -> int:
        return len(self.reports)

    def __iter__(self) -> Iterator[FunctionReport]:
        return iter(self.reports)
