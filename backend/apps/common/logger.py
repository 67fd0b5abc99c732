import logging
from decimal import Decimal
from functools import partialmethod
from typing import Any, Dict, Mapping, Optional
from uuid import UUID

_PLAIN_TYPES = (str, int, float, bool, Decimal, UUID)


def render(message: str, context: Mapping[str, Any]) -> str:
    """``Cart item added | component=carts user_id=7 total=35.00``"""
    if not context:
        return message
    pairs = " ".join(
        f"{key}={value if value is None or isinstance(value, _PLAIN_TYPES) else repr(value)}"
        for key, value in context.items()
    )
    return f"{message} | {pairs}"


class AppLogger:
    """Stdlib logger plus a dict of context bound with :meth:`bind`."""

    def __init__(
        self,
        name: str,
        context: Optional[Dict[str, Any]] = None,
        _logger: Optional[logging.Logger] = None,
    ):
        self._logger = _logger or logging.getLogger(name)
        self._name = name
        self._context = dict(context or {})

    @property
    def context(self) -> Dict[str, Any]:
        return dict(self._context)

    def bind(self, **extra: Any) -> "AppLogger":
        return AppLogger(self._name, {**self._context, **extra}, _logger=self._logger)

    def log(self, level: int, message: str, exc_info: bool = False, **context: Any) -> None:
        if self._logger.isEnabledFor(level):
            self._logger.log(
                level, render(message, {**self._context, **context}), exc_info=exc_info
            )

    debug = partialmethod(log, logging.DEBUG)
    info = partialmethod(log, logging.INFO)
    warning = partialmethod(log, logging.WARNING)
    error = partialmethod(log, logging.ERROR)
    # Only meaningful inside an ``except`` block
    exception = partialmethod(log, logging.ERROR, exc_info=True)


def get_logger(name: str) -> AppLogger:
    return AppLogger(name)
