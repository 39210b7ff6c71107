from app.cache.manager import TransactionStore, tx_store
from app.commands import cleared, reset
from app.fetchers.list_fetcher import fetch_transactions
from app.fetchers.transaction_fetcher import fetch_transaction


def clear_list(store: TransactionStore = tx_store) -> None:
    store.apply(cleared())


def reset_cache(store: TransactionStore = tx_store) -> None:
    store.apply(reset())


__all__ = ["clear_list", "fetch_transaction", "fetch_transactions", "reset_cache"]
