from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema

from .constants import MAX_USERNAME_LEN
from .errors import ConfigError, UsernameError

SCHEMA_DIR = Path(__file__).parent / "schemas"

# Mapping schema name -> filename (relative to SCHEMA_DIR)
SCHEMA_REGISTRY: Dict[str, str] = {
    "username": "username.json",
    "client_config": "client_config.json",
    "server_config": "server_config.json",
}

LENGTH_KEYWORDS = {"minLength", "maxLength"}


def _schema_path(name: str) -> Optional[Path]:
    filename = SCHEMA_REGISTRY.get(name)
    if not filename:
        return None
    path = SCHEMA_DIR / filename
    return path if path.exists() else None


@lru_cache(maxsize=16)
def load_schema(name: str) -> Optional[dict]:
    """Load JSON schema by registry name if present."""
    path = _schema_path(name)
    if not path:
        return None
    with path.open("r", encoding="utf-8") as fp:
        return json.load(fp)


def validate_username(name: str, max_len: int = MAX_USERNAME_LEN) -> str:
    """
    Check a local username: 1..max_len ASCII letters.

    Returns the name unchanged; raises UsernameError with a user-facing reason.
    """
    schema = {**(load_schema("username") or {}), "maxLength": max_len}
    errors = list(jsonschema.Draft7Validator(schema).iter_errors(name))
    # Length problems are reported before character problems.
    if any(err.validator in LENGTH_KEYWORDS for err in errors):
        raise UsernameError(f"must be between 1 and {max_len} characters")
    # `$` in the schema pattern also matches before a trailing newline.
    if errors or not (name.isascii() and name.isalpha()):
        raise UsernameError("username can only contain letters")
    return name


def validate_config(config: Dict[str, Any], schema_name: str = "client_config") -> None:
    """Run json-schema validation plus the cross-field size check on a config dict."""
    schema = load_schema(schema_name)
    if schema:
        try:
            jsonschema.validate(instance=config, schema=schema)
        except jsonschema.ValidationError as exc:
            raise ConfigError(f"Config validation failed: {exc.message}") from exc
    overhead = int(config["max_username_len"]) + 2
    if int(config["max_message_len"]) <= overhead:
        raise ConfigError("max_message_len must leave room for the username prefix")


__all__ = ["load_schema", "validate_username", "validate_config"]
