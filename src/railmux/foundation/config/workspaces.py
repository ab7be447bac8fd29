"""Workspace registry: read Railway tokens from the process environment.

Sources, first non-empty wins:

1. ``RAILWAY_TOKEN_<LABEL>``: named tokens (``RAILWAY_TOKEN_ACME_PROD`` -> ``acme prod``)
2. ``RAILWAY_API_TOKENS``: comma-separated tokens labelled ``workspace-1``, ``workspace-2``, ...
3. ``RAILWAY_API_TOKEN``: single token labelled ``default``

Order of the returned list is the routing order: the first workspace is the
primary for single-target operations and is tried first on fallback.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, SecretStr

NAMED_TOKEN_PREFIX = "RAILWAY_TOKEN_"
TOKEN_LIST_VAR = "RAILWAY_API_TOKENS"
SINGLE_TOKEN_VAR = "RAILWAY_API_TOKEN"

MISSING_TOKENS_HELP = (
    "No Railway API tokens found.\n"
    "Set one or more of:\n"
    f"  {SINGLE_TOKEN_VAR:<26} single token\n"
    f"  {TOKEN_LIST_VAR:<26} comma-separated tokens\n"
    f"  {NAMED_TOKEN_PREFIX + '<LABEL>':<26} named tokens (e.g. RAILWAY_TOKEN_ACME)\n"
    "Get tokens at https://railway.com/account/tokens"
)


class WorkspaceCredential(BaseModel):
    """One workspace token and its human-chosen label."""

    model_config = ConfigDict(frozen=True)

    token: SecretStr
    label: str = Field(..., min_length=1)


def _label_from_key(key: str) -> str:
    return key[len(NAMED_TOKEN_PREFIX):].lower().replace("_", " ")


def load_workspaces(environ: Mapping[str, str] | None = None) -> list[WorkspaceCredential]:
    """Build the ordered workspace list from environment variables.

    An empty list is a valid result; callers decide whether that is fatal.
    Duplicate labels are passed through as-is.
    """
    env = os.environ if environ is None else environ

    named = [
        WorkspaceCredential(token=SecretStr(value), label=_label_from_key(key))
        for key, value in env.items()
        if key.startswith(NAMED_TOKEN_PREFIX) and value and _label_from_key(key)
    ]
    if named:
        return named

    if listed := env.get(TOKEN_LIST_VAR):
        tokens = [t.strip() for t in listed.split(",") if t.strip()]
        if tokens:
            return [
                WorkspaceCredential(token=SecretStr(t), label=f"workspace-{i}")
                for i, t in enumerate(tokens, start=1)
            ]

    if single := env.get(SINGLE_TOKEN_VAR):
        return [WorkspaceCredential(token=SecretStr(single), label="default")]

    return []
