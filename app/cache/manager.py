import logging
from datetime import datetime

from app.commands import (
    Cleared,
    Command,
    RequestFailed,
    RequestStarted,
    RequestSucceeded,
    Reset,
)
from app.models.transaction import ListPage, ListState, RequestState, Transaction

logger = logging.getLogger(__name__)


class TransactionStore:
    """In-memory state for single-transaction lookups and the paginated list.

    A hash is a cache hit once a success command has been applied for it; the
    entry then stays authoritative until ``reset()``. Pages accumulate until
    ``clear()``. Nothing here performs I/O.
    """

    def __init__(self):
        self._cached: dict[str, Transaction] = {}
        self._requests: dict[str, RequestState] = {}
        self._pages: dict[int, ListPage] = {}
        self._page_requests: dict[int, RequestState] = {}
        self._latest_page: int | None = None
        self._list_error: Exception | None = None
        self._list_received_at: datetime | None = None

    def apply(self, command: Command) -> None:
        if isinstance(command, RequestStarted):
            self.apply_request_started(command)
        elif isinstance(command, RequestSucceeded):
            self.apply_request_succeeded(command)
        elif isinstance(command, RequestFailed):
            self.apply_request_failed(command)
        elif isinstance(command, Cleared):
            self.clear()
        elif isinstance(command, Reset):
            self.reset()
        else:
            raise TypeError(f"Unknown command: {command!r}")

    def apply_request_started(self, command: RequestStarted) -> None:
        logger.debug("STARTED %s %s", command.scope, command.key)
        if command.scope == "transaction":
            self._requests[command.key] = RequestState(
                status="pending", data=self._cached.get(command.key)
            )
        else:
            self._page_requests[command.key] = RequestState(status="pending")

    def apply_request_succeeded(self, command: RequestSucceeded) -> None:
        logger.debug("SUCCEEDED %s %s", command.scope, command.key)
        if command.scope == "transaction":
            self._cached[command.key] = command.payload
            self._requests[command.key] = RequestState(
                status="fulfilled", data=command.payload, received_at=command.received_at
            )
            return

        page = ListPage.model_validate(command.payload)
        self._pages[command.key] = page
        self._page_requests[command.key] = RequestState(
            status="fulfilled", data=page, received_at=command.received_at
        )
        self._latest_page = command.key
        self._list_error = None
        self._list_received_at = command.received_at

    def apply_request_failed(self, command: RequestFailed) -> None:
        logger.debug("FAILED %s %s: %s", command.scope, command.key, command.error)
        state = RequestState(
            status="failed", error=command.error, received_at=command.received_at
        )
        if command.scope == "transaction":
            self._requests[command.key] = state
        else:
            self._page_requests[command.key] = state
            self._list_error = command.error
            self._list_received_at = command.received_at

    def clear(self) -> None:
        self._pages.clear()
        self._page_requests.clear()
        self._latest_page = None
        self._list_error = None
        self._list_received_at = None

    def reset(self) -> None:
        self._cached.clear()
        self._requests.clear()

    def get(self, tx_hash: str) -> RequestState:
        return self._requests.get(tx_hash) or RequestState()

    def cached(self, tx_hash: str) -> Transaction | None:
        return self._cached.get(tx_hash)

    def page_state(self, page: int) -> RequestState:
        return self._page_requests.get(page) or RequestState()

    def list_state(self) -> ListState:
        pages = [self._pages[p] for p in sorted(self._pages)]
        return ListState(
            pages=pages,
            page=max(self._pages, default=0),
            is_loading=any(s.status == "pending" for s in self._page_requests.values()),
            total_count=self._total_count(pages),
            error=self._list_error,
            received_at=self._list_received_at,
        )

    def _total_count(self, pages: list[ListPage]) -> int:
        if self._latest_page is None or self._latest_page not in self._pages:
            return 0
        latest = self._pages[self._latest_page]
        total = 0
        for chain in ("neo2", "neo3"):
            reported = getattr(latest, chain).reported_total()
            if reported is None:
                reported = sum(len(getattr(p, chain).transactions) for p in pages)
            total += reported
        return total

    def __len__(self) -> int:
        return len(self._cached)


tx_store = TransactionStore()
