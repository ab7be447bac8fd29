"""Railway API token handling."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, SecretStr, field_serializer


def mask_token(token: str) -> str:
    """Show only the edges of a token: ``abcd...wxyz``."""
    return f"{token[:4]}...{token[-4:]}" if len(token) > 8 else "***"


class BearerAuth(BaseModel):
    """Authorization header for one workspace token.

    The token is a SecretStr, so it stays out of reprs, logs and JSON dumps.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    token: SecretStr

    def apply(self, headers: dict[str, str]) -> dict[str, str]:
        headers["Authorization"] = f"Bearer {self.token.get_secret_value()}"
        return headers

    @field_serializer("token", when_used="json")
    def _masked(self, v: SecretStr) -> str:
        return mask_token(v.get_secret_value())
