"""Logging for linkedin_auth.

Every module logs through ``logger`` (or a logger derived from it) so that
request-scoped dimensions travel with each record:

    log = logger.with_prefix("LinkedIn: ").with_context(request_id=request_id)
    log.info("Requesting OAuth1 temporary credentials")

Dimensions are attached to the record as ``record.dimensions`` and rendered
by both the text and JSON formatters.
"""

import json
import logging
import sys
from typing import Any, Dict, MutableMapping, Optional, Tuple

from linkedin_auth.core.config import settings

LOGGER_NAME = "linkedin_auth"


class ContextFormatter(logging.Formatter):
    """Plain-text formatter that appends dimensions as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the record, then append its dimensions."""
        line = super().format(record)
        dimensions = getattr(record, "dimensions", None)
        if dimensions:
            rendered = " ".join(f"{k}={v}" for k, v in sorted(dimensions.items()))
            line = f"{line} [{rendered}]"
        return line


class JSONFormatter(logging.Formatter):
    """Formatter that emits one JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        """Serialize the record and its dimensions."""
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(getattr(record, "dimensions", None) or {})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter carrying a message prefix and structured dimensions.

    ``with_context`` and ``with_prefix`` never mutate the receiver; they return
    a new adapter so a logger can be narrowed per request without leaking
    dimensions into concurrent flows.
    """

    def __init__(
        self,
        logger: logging.Logger,
        prefix: str = "",
        dimensions: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Wrap ``logger`` with a prefix and a copy of ``dimensions``."""
        super().__init__(logger, {})
        self.prefix = prefix
        self.dimensions: Dict[str, Any] = dict(dimensions or {})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        """Prefix the message and merge dimensions into ``extra``."""
        extra = dict(kwargs.get("extra") or {})
        extra["dimensions"] = {**self.dimensions, **extra.get("dimensions", {})}
        kwargs["extra"] = extra
        return f"{self.prefix}{msg}", kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a logger with ``dimensions`` added to the current ones."""
        return ContextualLogger(
            self.logger,
            prefix=self.prefix,
            dimensions={**self.dimensions, **dimensions},
        )

    def with_prefix(self, prefix: str) -> "ContextualLogger":
        """Return a logger whose messages start with ``prefix``."""
        return ContextualLogger(
            self.logger,
            prefix=f"{self.prefix}{prefix}",
            dimensions=self.dimensions,
        )


def _build_handler(json_output: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            ContextFormatter("%(asctime)s %(levelname)s %(name)s - %(message)s")
        )
    return handler


def configure_logging(level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """Send package records to stdout, as text or JSON lines.

    Hosts that want the package's own output call this once at startup.
    Records then stop propagating to the root logger, so a host that also
    configures root logging does not see them twice.
    """
    base = logging.getLogger(LOGGER_NAME)
    base.setLevel(level or settings.LOG_LEVEL)
    for handler in list(base.handlers):
        if not isinstance(handler, logging.NullHandler):
            base.removeHandler(handler)
    base.addHandler(_build_handler(settings.LOG_JSON if json_output is None else json_output))
    base.propagate = False


# Silent unless the host configures logging.
logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())
logging.getLogger(LOGGER_NAME).setLevel(settings.LOG_LEVEL)

logger = ContextualLogger(logging.getLogger(LOGGER_NAME))
