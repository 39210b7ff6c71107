"""State-transition commands applied by the transaction store.

Orchestrators never mutate the store directly: they emit one of the
commands below and the store applies it. Success and failure commands are
timestamped when they are emitted.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

Scope = Literal["transaction", "list"]


class _Command(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class RequestStarted(_Command):
    kind: Literal["request_started"] = "request_started"
    scope: Scope
    key: str | int


class RequestSucceeded(_Command):
    kind: Literal["request_succeeded"] = "request_succeeded"
    scope: Scope
    key: str | int
    payload: Any
    received_at: datetime


class RequestFailed(_Command):
    kind: Literal["request_failed"] = "request_failed"
    scope: Scope
    key: str | int
    error: Exception
    received_at: datetime


class Cleared(_Command):
    kind: Literal["cleared"] = "cleared"
    received_at: datetime


class Reset(_Command):
    kind: Literal["reset"] = "reset"
    received_at: datetime


Command = Annotated[
    Union[RequestStarted, RequestSucceeded, RequestFailed, Cleared, Reset],
    Field(discriminator="kind"),
]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def request_started(scope: Scope, key: str | int) -> RequestStarted:
    return RequestStarted(scope=scope, key=key)


def request_succeeded(scope: Scope, key: str | int, payload: Any) -> RequestSucceeded:
    return RequestSucceeded(scope=scope, key=key, payload=payload, received_at=_now())


def request_failed(scope: Scope, key: str | int, error: Exception) -> RequestFailed:
    return RequestFailed(scope=scope, key=key, error=error, received_at=_now())


def cleared() -> Cleared:
    return Cleared(received_at=_now())


def reset() -> Reset:
    return Reset(received_at=_now())
