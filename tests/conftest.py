import pytest

from app.cache.manager import tx_store
from app.config import settings
from app.display.converters import clear_converters


@pytest.fixture(autouse=True)
def clear_store():
    tx_store.reset()
    tx_store.clear()
    yield
    tx_store.reset()
    tx_store.clear()
    clear_converters()


TX_HASH = "0x" + "ab" * 32

NEO2_BASE = settings.base_url()
NEO3_BASE = settings.base_url(settings.successor_chain)


def tx_url(resource: str, tx_hash: str = TX_HASH) -> str:
    return f"{NEO2_BASE}/{resource}/{tx_hash}"


def neo2_page_url(page: int) -> str:
    return f"{NEO2_BASE}/transactions/{page}"


def neo3_page_url(page: int) -> str:
    return f"{NEO3_BASE}/transactions/{page}"


# --- Mock backend responses ---

MOCK_TRANSACTION = {
    "txid": TX_HASH,
    "type": "InvocationTransaction",
    "size": 223,
    "block": 4512345,
    "time": 1591891200,
}

MOCK_LOG = {
    "txid": TX_HASH,
    "vmstate": "HALT",
    "notifications": [{"contract": "0x" + "cd" * 20, "state": []}],
}

MOCK_ABSTRACT = {
    "txid": TX_HASH,
    "abstracts": [{"from": "AXpNr3SDfLXbPHNdqxYeHK5cYpKMHZxMTV", "amount": "10"}],
}

MOCK_NEO2_PAGE = {
    "transactions": [{"hash": "a", "block": 1}, {"hash": "b", "block": 2}],
    "total_entries": 120,
    "page_size": 2,
}

MOCK_NEO3_PAGE = {
    "items": [{"hash": "c", "block": 10}],
    "totalCount": 40,
}

MOCK_NEO3_PAGE_EMPTY = {"items": [], "totalCount": 0}
