from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer

Transaction = dict[str, Any]

RequestStatus = Literal["idle", "pending", "fulfilled", "failed"]


class ChainTransactions(BaseModel):
    model_config = ConfigDict(extra="allow")

    transactions: list[Transaction] = Field(default_factory=list)

    def reported_total(self) -> int | None:
        extra = self.model_extra or {}
        for field in ("total_entries", "totalCount"):
            value = extra.get(field)
            if isinstance(value, int) and not isinstance(value, bool):
                return value
        return None


class ListPage(BaseModel):
    page: int
    neo2: ChainTransactions
    neo3: ChainTransactions


class RequestState(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    status: RequestStatus = "idle"
    data: Any = None
    error: Exception | None = None
    received_at: datetime | None = None

    @field_serializer("error")
    def _serialize_error(self, error: Exception | None) -> str | None:
        return str(error) if error is not None else None


class ListState(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    pages: list[ListPage] = Field(default_factory=list)
    page: int = 0
    is_loading: bool = False
    total_count: int = 0
    error: Exception | None = None
    received_at: datetime | None = None

    @field_serializer("error")
    def _serialize_error(self, error: Exception | None) -> str | None:
        return str(error) if error is not None else None
