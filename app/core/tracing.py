"""Трассировка запросов через Sentry: спаны с атрибутами и регистрация исключений.

Трассировщик передается в обработчики через зависимость ``get_tracer``,
поэтому в тестах его можно подменить через ``app.dependency_overrides``.
Без ``SENTRY_DSN`` SDK не инициализируется и спаны никуда не отправляются.
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

import sentry_sdk

from app.config import settings

logger = logging.getLogger(__name__)

# Статусы спана -> статусы Sentry
SENTRY_STATUSES = {"ok": "ok", "error": "internal_error"}


def init_sentry() -> bool:
    """Инициализирует Sentry SDK, если задан DSN; возвращает, включен ли он"""
    if not settings.SENTRY_DSN:
        logger.info("SENTRY_DSN is not set, tracing data stays local")
        return False

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        release=f"{settings.APP_NAME}@{settings.APP_VERSION}",
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        send_default_pii=False,
    )
    logger.info("Sentry initialized for environment %s", settings.ENVIRONMENT)
    return True


class Span:
    """Спан операции; атрибуты также пишутся в data спана Sentry"""

    def __init__(
        self,
        name: str,
        op: Optional[str] = None,
        attributes: Optional[Dict[str, Any]] = None,
        sentry_span: Any = None,
    ):
        self.name = name
        self.op = op
        self.status = "ok"
        self.attributes: Dict[str, Any] = {}
        self._sentry_span = sentry_span
        self.set_attributes(attributes or {})

    def set_attribute(self, key: str, value: Any) -> None:
        self.attributes[key] = value
        if self._sentry_span is not None:
            self._sentry_span.set_data(key, value)

    def set_attributes(self, attributes: Dict[str, Any]) -> None:
        for key, value in attributes.items():
            self.set_attribute(key, value)

    def set_status(self, status: str) -> None:
        self.status = status
        if self._sentry_span is not None:
            self._sentry_span.set_status(SENTRY_STATUSES.get(status, status))


class Tracer:
    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    @contextmanager
    def start_span(
        self,
        name: str,
        op: Optional[str] = None,
        attributes: Optional[Dict[str, Any]] = None,
    ) -> Iterator[Span]:
        if not self.enabled:
            yield Span(name, op=op, attributes=attributes)
            return

        with sentry_sdk.start_span(name=name, op=op) as sentry_span:
            span = Span(name, op=op, attributes=attributes, sentry_span=sentry_span)
            try:
                yield span
            except Exception as exc:
                span.set_status("error")
                span.set_attribute("error.type", type(exc).__name__)
                raise
            else:
                span.set_status("ok")
            finally:
                self.on_span_finished(span)

    def on_span_finished(self, span: Span) -> None:
        logger.debug(
            "span %s op=%s status=%s attributes=%s",
            span.name, span.op, span.status, span.attributes,
        )

    def capture_exception(
        self,
        exc: BaseException,
        tags: Optional[Dict[str, Any]] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        logger.error(
            "Captured %s: %s tags=%s extra=%s",
            type(exc).__name__, exc, tags or {}, extra or {},
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        if self.enabled:
            sentry_sdk.capture_exception(exc, tags=tags or {}, extras=extra or {})


tracer = Tracer(enabled=settings.TRACING_ENABLED)


def get_tracer() -> Tracer:
    return tracer
