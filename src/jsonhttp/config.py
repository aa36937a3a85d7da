"""
=============================================================================
CONFIGURATION
=============================================================================

Settings shared by the JSON pipelines and the access logging middleware.

    config = HandlerConfig(log_level="DEBUG", dump_stack_traces=False)
    config.validate()
    setup_logging(config)

    handler = post_request_body(convert, Conversion, Result,
                                MarshallContext(), UnmarshallContext(),
                                config=config)

Or from the environment (12-factor style):

    JSONHTTP_LOG_LEVEL=DEBUG JSONHTTP_DUMP_STACK_TRACES=0 python app.py

    config = HandlerConfig.from_env()

=============================================================================
"""

import logging
import os
from dataclasses import dataclass


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_LOG_FORMATS = ("text", "json")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class HandlerConfig:
    """Configuration for jsonhttp pipelines."""

    # ─────────────────────────────────────────────────────────────────────
    # ERROR BODIES
    # ─────────────────────────────────────────────────────────────────────

    dump_stack_traces: bool = True
    """
    Attach a text/plain traceback to 400/500 responses that have a cause.

    When False the entity is empty; status and message are unchanged.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Level for the jsonhttp logger hierarchy."""

    log_format: str = "text"
    """Access log format: 'text' (Apache-like) or 'json'."""

    # ─────────────────────────────────────────────────────────────────────
    # IDENTITY
    # ─────────────────────────────────────────────────────────────────────

    server_name: str = "jsonhttp/1.0"
    """Value of the Server header added by HTTPResponse.to_bytes()."""

    @classmethod
    def from_env(cls) -> "HandlerConfig":
        """
        Create configuration from environment variables.

            JSONHTTP_DUMP_STACK_TRACES  1/0, true/false (default: true)
            JSONHTTP_LOG_LEVEL          Logging level (default: INFO)
            JSONHTTP_LOG_FORMAT         text or json (default: text)
            JSONHTTP_SERVER_NAME        Server header (default: jsonhttp/1.0)
        """
        dump = os.getenv("JSONHTTP_DUMP_STACK_TRACES", "true").strip().lower()
        return cls(
            dump_stack_traces=dump not in _FALSE_VALUES,
            log_level=os.getenv("JSONHTTP_LOG_LEVEL", "INFO"),
            log_format=os.getenv("JSONHTTP_LOG_FORMAT", "text"),
            server_name=os.getenv("JSONHTTP_SERVER_NAME", "jsonhttp/1.0"),
        )

    def validate(self) -> None:
        """Fail fast on values that would only break at first request."""
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {self.log_level}. Must be one of {', '.join(_LOG_LEVELS)}.")
        if self.log_format not in _LOG_FORMATS:
            raise ValueError(f"Invalid log_format: {self.log_format}. Must be 'text' or 'json'.")
        if not self.server_name:
            raise ValueError("server_name must not be empty")


DEFAULT_CONFIG = HandlerConfig()


def setup_logging(config: HandlerConfig) -> None:
    """Configure root logging and the jsonhttp logger level from config."""
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logging.getLogger("jsonhttp").setLevel(level)
