from __future__ import annotations

import logging
import os
from typing import Literal

from pydantic import BaseModel


logger = logging.getLogger(__name__)

DEMO_API_KEY = "dcb31709b452b1cf9dc26972add0fda6"
DEFAULT_SCRIPT_URL = "https://www.desmos.com/api/v1.11/calculator.js"

EscapingMode = Literal["permissive", "strict"]
_ESCAPING_MODES = ("permissive", "strict")
_TRUTHY = {"1", "true", "yes", "on"}


class ServerConfig(BaseModel):
    """Process configuration for the server.

    `debug` is the connection-time option of the server; it only raises
    the log level. Everything else feeds the generated HTML.
    """

    debug: bool = False
    log_level: str = "INFO"
    script_url: str = DEFAULT_SCRIPT_URL
    api_key: str = DEMO_API_KEY
    escaping: EscapingMode = "permissive"

    @property
    def widget_script_src(self) -> str:
        return f"{self.script_url}?apiKey={self.api_key}"

    @property
    def effective_log_level(self) -> int:
        if self.debug:
            return logging.DEBUG
        level = getattr(logging, self.log_level.upper(), None)
        if isinstance(level, int) and not isinstance(level, bool):
            return level
        return logging.INFO


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def load_config() -> ServerConfig:
    """Build a ServerConfig from DESMOS_* environment variables."""
    escaping = os.getenv("DESMOS_MCP_ESCAPING", "permissive").strip().lower()
    if escaping not in _ESCAPING_MODES:
        logger.warning(
            "load_config: unknown DESMOS_MCP_ESCAPING=%r, using permissive",
            escaping,
        )
        escaping = "permissive"
    return ServerConfig(
        debug=_env_flag("DESMOS_MCP_DEBUG"),
        log_level=os.getenv("DESMOS_MCP_LOG_LEVEL", "INFO").upper(),
        script_url=os.getenv("DESMOS_SCRIPT_URL") or DEFAULT_SCRIPT_URL,
        api_key=os.getenv("DESMOS_API_KEY") or DEMO_API_KEY,
        escaping=escaping,
    )
