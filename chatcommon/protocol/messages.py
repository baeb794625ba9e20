from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .constants import RECOMMENDED_MIN_PORT, SEPARATOR
from .errors import ConfigError


class Endpoint(BaseModel):
    """Host/port pair given on the command line."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(..., min_length=1, description="Host name or address")
    port: int = Field(..., ge=0, le=65535, description="TCP port")

    @property
    def service(self) -> str:
        return str(self.port)

    def below_recommended(self, minimum: int = RECOMMENDED_MIN_PORT) -> bool:
        return self.port < minimum

    @classmethod
    def parse(cls, host: str, port: str) -> "Endpoint":
        try:
            return cls(host=host, port=int(port))
        except ValueError as exc:
            # ValidationError is a ValueError subclass; both mean a bad port here.
            detail = exc.errors()[0]["msg"] if isinstance(exc, ValidationError) else str(exc)
            raise ConfigError(f"invalid port: {port} ({detail})") from exc


class ChatLine(BaseModel):
    """One chat line as shown to the local user."""

    model_config = ConfigDict(frozen=True)

    sender: str
    body: str = ""

    def render(self) -> str:
        return f"{self.sender}{SEPARATOR}{self.body}"


__all__ = ["Endpoint", "ChatLine"]
