"""
Priority registry.

Shared machinery for strategy registries: strategies are kept sorted by
ascending ``priority`` (ties keep registration order), those whose
``can_handle`` rejects the subject are skipped, the first acceptable result
wins, and a strategy that raises is recorded and skipped.

Used by feed discovery (async strategies) and comment link extraction
(sync strategies).
"""

from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar


class PrioritizedStrategy(Protocol):
    """Anything with an ordinal priority and a ``can_handle`` predicate."""

    priority: int

    def can_handle(self, subject: Any) -> bool: ...


S = TypeVar("S", bound=PrioritizedStrategy)
R = TypeVar("R")


def strategy_name(strategy: object) -> str:
    """Display name of a strategy, used in logs and telemetry."""
    return getattr(strategy, "name", None) or type(strategy).__name__


@dataclass
class StrategyFailure:
    """A strategy that raised during a walk."""

    strategy: str
    priority: int
    error: Exception


@dataclass
class WalkResult(Generic[R]):
    """Outcome of walking a registry for one subject."""

    result: R | None = None
    winner: str | None = None
    tried: list[str] = field(default_factory=list)
    failures: list[StrategyFailure] = field(default_factory=list)

    @property
    def all_failed(self) -> bool:
        """True when at least one strategy ran and every one of them raised."""
        return bool(self.tried) and len(self.failures) == len(self.tried)


class PriorityRegistry(Generic[S, R]):
    """
    Ordered collection of strategies with early-exit evaluation.

    Subclasses decide what counts as a usable result (``is_hit``) and how a
    failure is reported (``on_failure``).
    """

    def __init__(self) -> None:
        self._strategies: list[S] = []

    def register(self, strategy: S) -> None:
        """
        Register a strategy.

        Lower priority runs first. ``list.sort`` is stable, so equal
        priorities run in registration order.
        """
        self._strategies.append(strategy)
        self._strategies.sort(key=lambda s: s.priority)

    @property
    def strategies(self) -> list[S]:
        """Registered strategies in execution order."""
        return list(self._strategies)

    def __len__(self) -> int:
        return len(self._strategies)

    def matching(self, subject: Any, walk: WalkResult[R] | None = None) -> Iterator[S]:
        """
        Yield strategies that accept ``subject``, in execution order.

        A ``can_handle`` that raises counts as a failed strategy: it is
        reported through ``on_failure`` (and recorded on ``walk`` when given)
        and the walk moves on.
        """
        for strategy in list(self._strategies):
            try:
                accepted = strategy.can_handle(subject)
            except Exception as e:
                if walk is not None:
                    name = strategy_name(strategy)
                    walk.tried.append(name)
                    walk.failures.append(StrategyFailure(name, strategy.priority, e))
                self.on_failure(strategy, subject, e)
                continue
            if not accepted:
                self.on_skip(strategy, subject)
                continue
            yield strategy

    def is_hit(self, result: R | None) -> bool:
        """Whether ``result`` ends the walk."""
        return bool(result)

    def on_skip(self, strategy: S, subject: Any) -> None:
        """Hook called for strategies that do not handle the subject."""

    def on_failure(self, strategy: S, subject: Any, error: Exception) -> None:
        """Hook called when a strategy raises."""

    def run(self, subject: Any, call: Callable[[S], R | None]) -> WalkResult[R]:
        """Walk synchronous strategies until one returns a hit."""
        walk: WalkResult[R] = WalkResult()
        for strategy in self.matching(subject, walk):
            name = strategy_name(strategy)
            walk.tried.append(name)
            try:
                result = call(strategy)
            except Exception as e:
                walk.failures.append(StrategyFailure(name, strategy.priority, e))
                self.on_failure(strategy, subject, e)
                continue
            if self.is_hit(result):
                walk.result = result
                walk.winner = name
                return walk
        return walk

    async def arun(
        self, subject: Any, call: Callable[[S], Awaitable[R | None]]
    ) -> WalkResult[R]:
        """Walk asynchronous strategies, one at a time, until one returns a hit."""
        walk: WalkResult[R] = WalkResult()
        for strategy in self.matching(subject, walk):
            name = strategy_name(strategy)
            walk.tried.append(name)
            try:
                result = await call(strategy)
            except Exception as e:
                walk.failures.append(StrategyFailure(name, strategy.priority, e))
                self.on_failure(strategy, subject, e)
                continue
            if self.is_hit(result):
                walk.result = result
                walk.winner = name
                return walk
        return walk
