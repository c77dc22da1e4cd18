"""
Telemetry adapters.

Discovery reports spans, breadcrumbs and exceptions through an injected
adapter. ``NoopTelemetry`` is the default; ``SentryTelemetry`` forwards to
sentry-sdk. Telemetry is strictly observational and never changes results.
"""

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from typing import Any, Literal, Protocol

import sentry_sdk

Level = Literal["debug", "info", "warning", "error", "fatal"]


class Span(Protocol):
    """Minimal span surface used by discovery."""

    def set_attribute(self, key: str, value: Any) -> None: ...

    def set_status(self, ok: bool, message: str | None = None) -> None: ...


class TelemetryAdapter(Protocol):
    """Observability hooks consumed by discovery."""

    def start_span(
        self, name: str, op: str, attributes: dict[str, Any] | None = None
    ) -> AbstractContextManager[Span]: ...

    def add_breadcrumb(
        self,
        message: str,
        *,
        category: str,
        level: Level = "info",
        data: dict[str, Any] | None = None,
    ) -> None: ...

    def capture_exception(
        self,
        error: BaseException,
        *,
        level: Level = "error",
        tags: dict[str, str] | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None: ...


class _NoopSpan:
    def set_attribute(self, key: str, value: Any) -> None:
        return None

    def set_status(self, ok: bool, message: str | None = None) -> None:
        return None


class NoopTelemetry:
    """Telemetry adapter that records nothing."""

    @contextmanager
    def start_span(
        self, name: str, op: str, attributes: dict[str, Any] | None = None
    ) -> Iterator[Span]:
        yield _NoopSpan()

    def add_breadcrumb(
        self,
        message: str,
        *,
        category: str,
        level: Level = "info",
        data: dict[str, Any] | None = None,
    ) -> None:
        return None

    def capture_exception(
        self,
        error: BaseException,
        *,
        level: Level = "error",
        tags: dict[str, str] | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        return None


class _SentrySpan:
    def __init__(self, span: Any) -> None:
        self._span = span

    def set_attribute(self, key: str, value: Any) -> None:
        self._span.set_data(key, value)

    def set_status(self, ok: bool, message: str | None = None) -> None:
        self._span.set_status("ok" if ok else "internal_error")
        if message:
            self._span.set_data("status_message", message)


class SentryTelemetry:
    """Telemetry adapter backed by sentry-sdk."""

    @contextmanager
    def start_span(
        self, name: str, op: str, attributes: dict[str, Any] | None = None
    ) -> Iterator[Span]:
        with sentry_sdk.start_span(op=op, name=name) as span:
            wrapped = _SentrySpan(span)
            for key, value in (attributes or {}).items():
                wrapped.set_attribute(key, value)
            yield wrapped

    def add_breadcrumb(
        self,
        message: str,
        *,
        category: str,
        level: Level = "info",
        data: dict[str, Any] | None = None,
    ) -> None:
        sentry_sdk.add_breadcrumb(category=category, message=message, level=level, data=data)

    def capture_exception(
        self,
        error: BaseException,
        *,
        level: Level = "error",
        tags: dict[str, str] | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        with sentry_sdk.new_scope() as scope:
            scope.set_level(level)
            for key, value in (tags or {}).items():
                scope.set_tag(key, value)
            for key, value in (extra or {}).items():
                scope.set_extra(key, value)
            sentry_sdk.capture_exception(error)


def init_sentry(
    dsn: str | None,
    environment: str | None = None,
    traces_sample_rate: float = 0.1,
) -> TelemetryAdapter:
    """
    Initialize sentry-sdk and return the matching adapter.

    Args:
        dsn: Sentry DSN. Empty disables Sentry.
        environment: Sentry environment name.
        traces_sample_rate: Fraction of transactions to trace.

    Returns:
        ``SentryTelemetry`` when a DSN is configured, otherwise ``NoopTelemetry``.
    """
    if not dsn:
        return NoopTelemetry()
    sentry_sdk.init(dsn=dsn, environment=environment, traces_sample_rate=traces_sample_rate)
    return SentryTelemetry()
