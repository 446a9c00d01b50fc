"""Shared schemas: credentials, transport responses and provider errors."""

from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, SecretStr


class Credentials(BaseModel):
    """Access key pair used to sign every request of one client."""

    model_config = ConfigDict(frozen=True)

    key_id: str = Field(..., min_length=1, description="Access key id")
    key_secret: SecretStr = Field(..., description="Access key secret")


class HTTPResponse(BaseModel):
    """Status, headers and body returned by the transport."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    headers: Dict[str, str] = Field(default_factory=dict)
    body: bytes = b""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class ProviderErrorDetail(BaseModel):
    """Decoded ``<Error>`` document returned with a rejected request."""

    model_config = ConfigDict(frozen=True)

    code: str = ""
    message: str = ""
    request_id: str = ""
    host_id: str = ""

    def describe(self) -> str:
        if self.code and self.message:
            return f"{self.code}: {self.message}"
        return self.code or self.message
