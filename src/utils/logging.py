"""JSON log lines for the API process.

Every record becomes one JSON object on stderr. Fields passed through
``extra=`` (userId, path, count, ...) are emitted as top-level keys.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Dict, Any

# Attributes every LogRecord carries; anything else came from extra=.
# uvicorn attaches color_message to its own records.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "color_message", "taskName"}


def _utc_timestamp(created: float) -> str:
    return datetime.fromtimestamp(created, tz=timezone.utc).isoformat().replace('+00:00', 'Z')


class JSONFormatter(logging.Formatter):
    """Render a LogRecord as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": _utc_timestamp(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        entry.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS and not callable(value)
        )
        return json.dumps(entry, default=str)


def setup_structured_logging(level: int = logging.INFO) -> logging.Handler:
    """Install the JSON handler on the root logger and return it.

    uvicorn's server loggers propagate to root; its access log keeps the
    handler directly and is raised to WARNING.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    for name in ("uvicorn", "uvicorn.error"):
        server_logger = logging.getLogger(name)
        server_logger.handlers = []
        server_logger.propagate = True

    access_logger = logging.getLogger("uvicorn.access")
    access_logger.handlers = [handler]
    access_logger.propagate = False
    access_logger.setLevel(logging.WARNING)
    return handler
