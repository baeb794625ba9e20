from __future__ import annotations

import logging
import os
from typing import Any, Dict

from dotenv import load_dotenv

from chatcommon.protocol import validator
from chatcommon.protocol.constants import ENCODING, MAX_MESSAGE_LEN, MAX_USERNAME_LEN, RECOMMENDED_MIN_PORT
from chatcommon.protocol.errors import ConfigError

DEFAULT_CONFIG: Dict[str, Any] = {
    "max_message_len": MAX_MESSAGE_LEN,
    "max_username_len": MAX_USERNAME_LEN,
    "recommended_min_port": RECOMMENDED_MIN_PORT,
    "encoding": ENCODING,
    "log_level": "WARNING",
}

CLIENT_CONFIG: Dict[str, Any] = DEFAULT_CONFIG.copy()

ENV_PREFIX = "CHATCLIENT_"


def load_config(env_path: str = ".env") -> Dict[str, Any]:
    """Load client configuration from env file/environment variables."""
    if os.path.exists(env_path):
        load_dotenv(env_path)

    for key, default_value in DEFAULT_CONFIG.items():
        env_key = f"{ENV_PREFIX}{key.upper()}"
        value = os.getenv(env_key, default_value)
        CLIENT_CONFIG[key] = coerce_type(value, type(default_value))

    CLIENT_CONFIG["log_level"] = str(CLIENT_CONFIG["log_level"]).upper()
    validator.validate_config(CLIENT_CONFIG, "client_config")
    logging.getLogger().setLevel(CLIENT_CONFIG["log_level"])
    return CLIENT_CONFIG


def coerce_type(value: Any, target_type: type) -> Any:
    if isinstance(value, target_type):
        return value
    try:
        if target_type is bool:
            return str(value).lower() in ("1", "true", "yes", "on")
        return target_type(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Cannot convert {value} to {target_type}") from exc


def get(key: str, default: Any = None) -> Any:
    return CLIENT_CONFIG.get(key, default)


__all__ = ["CLIENT_CONFIG", "DEFAULT_CONFIG", "ConfigError", "coerce_type", "get", "load_config"]
