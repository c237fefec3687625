"""
JSON logging for mount operations.

Each record is one JSON line on stderr.  Records emitted through
:data:`vm_logger` also carry the resource type, lifecycle operation and
mount path, so a run against many mounts can be grepped per path.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

# Record attributes copied into the JSON line when present.
CONTEXT_FIELDS = ("request_id", "resource", "operation", "path")


class StructuredFormatter(logging.Formatter):
    """Render a record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in CONTEXT_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                entry[key] = val
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = str(record.exc_info[1])
        return json.dumps(entry)


class VaultMountLogger:
    """The ``vaultmount`` logger, with mount context passed as keywords.

    Defaults to INFO; the per-call remote traffic is logged at DEBUG.
    """

    def __init__(self, name: str = "vaultmount") -> None:
        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def set_level(self, level: int | str) -> None:
        if isinstance(level, str):
            level = level.upper()
        self.logger.setLevel(level)

    def log_operation(
        self,
        level: int,
        message: str,
        *,
        resource: str | None = None,
        operation: str | None = None,
        path: str | None = None,
        request_id: str | None = None,
        exc_info: bool = False,
    ) -> None:
        """Log *message* tagged with the mount it concerns.

        Args:
            level: Logging level.
            message: Human-readable message.
            resource: Resource type, e.g. ``vault_secret_backend``.
            operation: ``create``, ``read``, ``update``, ``delete`` or ``exists``.
            path: Mount path.
            request_id: Correlation ID; a short random one when omitted.
            exc_info: Attach the active exception.
        """
        extra = {
            "resource": resource,
            "operation": operation,
            "path": path,
            "request_id": request_id or uuid.uuid4().hex[:12],
        }
        self.logger.log(level, message, extra=extra, exc_info=exc_info)

    def info(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.DEBUG, message, **kwargs)


vm_logger = VaultMountLogger()
