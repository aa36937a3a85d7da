"""
=============================================================================
ACCESS LOGGING MIDDLEWARE
=============================================================================

Emits one line per handled request on the ``jsonhttp.access`` logger:

    text:  127.0.0.1 - - [19/Oct/2026:10:00:00 +0000] "POST /convert" 400 0 0.41ms "Required body missing"
    json:  {"request_id": "1f0c2a9b", "method": "POST", "path": "/convert", ...}

Pipelines never raise for client errors, so the status comes from the
response. Anything that does escape the handler (an unsupported
Accept-Charset, a failing post transform) is logged and re-raised.

Configure the logger like any other:

    logging.getLogger("jsonhttp.access").addHandler(file_handler)

=============================================================================
"""

import json
import logging
import time
import uuid
from dataclasses import dataclass
from typing import Optional

from ..config import DEFAULT_CONFIG, HandlerConfig
from ..http.request import HTTPRequest
from ..http.response import HTTPResponse
from .base import Middleware, NextHandler


logger = logging.getLogger("jsonhttp.access")


@dataclass
class RequestLog:
    """Structured log entry for a request."""

    request_id: str
    method: str
    path: str
    client_ip: str
    status_code: int
    message: str
    content_length: int
    duration_ms: float
    timestamp: str

    def to_dict(self) -> dict:
        return {
            "request_id": self.request_id,
            "method": self.method,
            "path": self.path,
            "client_ip": self.client_ip,
            "status_code": self.status_code,
            "message": self.message,
            "content_length": self.content_length,
            "duration_ms": round(self.duration_ms, 2),
            "timestamp": self.timestamp,
        }

    def to_text(self) -> str:
        """Apache combined style, with the status message appended."""
        return (
            f'{self.client_ip or "-"} - - [{self.timestamp}] '
            f'"{self.method} {self.path}" {self.status_code} '
            f'{self.content_length} {self.duration_ms:.2f}ms "{self.message}"'
        )


class LoggingMiddleware(Middleware):
    """
    Request logging middleware.

    Args:
        log_format: "text" or "json"; defaults to the config's format.
        log_level: Level for successful requests. 4xx/5xx are logged at
                   WARNING and ERROR respectively.
        config: Supplies the default log format.
    """

    def __init__(
        self,
        log_format: Optional[str] = None,
        log_level: int = logging.INFO,
        config: HandlerConfig = DEFAULT_CONFIG,
    ):
        self.log_format = log_format or config.log_format
        self.log_level = log_level

    def __call__(self, request: HTTPRequest, response: HTTPResponse, next: NextHandler) -> None:
        # 8 hex chars are plenty to correlate lines within one process
        request_id = uuid.uuid4().hex[:8]
        start_time = time.time()

        try:
            next(request, response)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"[{request_id}] Request failed: {request.method} {request.path} "
                f"- {type(e).__name__}: {e} ({duration_ms:.2f}ms)"
            )
            raise

        duration_ms = (time.time() - start_time) * 1000
        status = response.status

        log_entry = RequestLog(
            request_id=request_id,
            method=request.method,
            path=request.path,
            client_ip=request.client_address[0],
            status_code=int(status.code) if status else 0,
            message=status.message if status else "",
            content_length=sum(entity.content_length for entity in response.entities),
            duration_ms=duration_ms,
            timestamp=time.strftime("%d/%b/%Y:%H:%M:%S %z"),
        )

        level = self.log_level
        if status is not None and status.code.is_server_error:
            level = logging.ERROR
        elif status is not None and status.code.is_client_error:
            level = logging.WARNING

        if self.log_format == "json":
            logger.log(level, json.dumps(log_entry.to_dict()))
        else:
            logger.log(level, log_entry.to_text())
