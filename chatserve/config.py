from __future__ import annotations

import os
from typing import Any, Dict

from dotenv import load_dotenv

from chatclient.config import coerce_type
from chatcommon.protocol import validator
from chatcommon.protocol.constants import ENCODING, MAX_MESSAGE_LEN, MAX_USERNAME_LEN, RECOMMENDED_MIN_PORT

DEFAULT_SERVER_CONFIG: Dict[str, Any] = {
    "host": "0.0.0.0",
    "backlog": 1,
    "max_message_len": MAX_MESSAGE_LEN,
    "max_username_len": MAX_USERNAME_LEN,
    "recommended_min_port": RECOMMENDED_MIN_PORT,
    "encoding": ENCODING,
    "log_level": "INFO",
}

SERVER_CONFIG = DEFAULT_SERVER_CONFIG.copy()

ENV_PREFIX = "CHATSERVE_"


def load_server_config(env_path: str = ".env") -> Dict[str, Any]:
    if os.path.exists(env_path):
        load_dotenv(env_path)
    for key, default_value in DEFAULT_SERVER_CONFIG.items():
        value = os.getenv(f"{ENV_PREFIX}{key.upper()}", default_value)
        SERVER_CONFIG[key] = coerce_type(value, type(default_value))
    SERVER_CONFIG["log_level"] = str(SERVER_CONFIG["log_level"]).upper()
    validator.validate_config(SERVER_CONFIG, "server_config")
    return SERVER_CONFIG


__all__ = ["SERVER_CONFIG", "DEFAULT_SERVER_CONFIG", "load_server_config"]
