"""Fetch one transaction, merging its primary, log and abstract resources."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Sequence

import httpx
from pydantic import BaseModel, ConfigDict

from app.cache.manager import TransactionStore, tx_store
from app.commands import RequestSucceeded, request_failed, request_started, request_succeeded
from app.config import settings
from app.fetchers.errors import NetworkFailure, PartialAggregateFailure
from app.fetchers.http import get_json, new_client
from app.models.transaction import RequestState, Transaction

logger = logging.getLogger(__name__)

# Resources fetched per hash, lowest precedence first: on key collisions the
# later resource overwrites the earlier one.
MERGE_PRECEDENCE = ("transaction", "log", "transaction_abstracts")

_inflight: dict[tuple[int, str], asyncio.Task] = {}


class TransactionPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    tx_hash: str
    requests: tuple[tuple[str, str], ...]

    def fold(self, bodies: Sequence[dict[str, Any]]) -> RequestSucceeded:
        return request_succeeded("transaction", self.tx_hash, merge_transaction_bodies(bodies))


def transaction_urls(tx_hash: str) -> tuple[tuple[str, str], ...]:
    base = settings.base_url()
    return tuple((resource, f"{base}/{resource}/{tx_hash}") for resource in MERGE_PRECEDENCE)


def merge_transaction_bodies(bodies: Sequence[dict[str, Any]]) -> Transaction:
    merged: Transaction = {}
    for body in bodies:
        merged.update(body)
    return merged


def plan_transaction_fetch(
    cached: Transaction | None, tx_hash: str
) -> RequestSucceeded | TransactionPlan:
    """Decide whether ``tx_hash`` needs a network round-trip.

    A cached record short-circuits into a success command carrying that
    record unchanged. Otherwise the returned plan lists the requests to run
    and folds their bodies into the success command.
    """
    if cached is not None:
        return request_succeeded("transaction", tx_hash, cached)
    return TransactionPlan(tx_hash=tx_hash, requests=transaction_urls(tx_hash))


async def gather_bodies(
    client: httpx.AsyncClient, requests: Sequence[tuple[str, str]]
) -> list[dict[str, Any]]:
    results = await asyncio.gather(
        *(get_json(client, url) for _, url in requests), return_exceptions=True
    )
    for (member, _), result in zip(requests, results):
        if isinstance(result, NetworkFailure):
            raise PartialAggregateFailure(member, result) from result
        if isinstance(result, BaseException):
            raise result
    return results


async def _run_plan(
    plan: TransactionPlan, store: TransactionStore, client: httpx.AsyncClient | None
) -> None:
    try:
        if client is None:
            async with new_client() as own_client:
                bodies = await gather_bodies(own_client, plan.requests)
        else:
            bodies = await gather_bodies(client, plan.requests)
    except NetworkFailure as exc:
        logger.warning("Transaction fetch failed for %s: %s", plan.tx_hash, exc)
        store.apply(request_failed("transaction", plan.tx_hash, exc))
        return

    store.apply(plan.fold(bodies))
    logger.info("Fetched transaction %s (%d fields)", plan.tx_hash, len(store.cached(plan.tx_hash)))


def _finish_inflight(key: tuple[int, str], task: asyncio.Task) -> None:
    _inflight.pop(key, None)
    if task.cancelled():
        logger.warning("In-flight fetch for %s was cancelled", key[1])
    elif task.exception() is not None:
        logger.error("In-flight fetch for %s raised", key[1], exc_info=task.exception())


async def fetch_transaction(
    tx_hash: str,
    store: TransactionStore = tx_store,
    client: httpx.AsyncClient | None = None,
) -> RequestState:
    plan = plan_transaction_fetch(store.cached(tx_hash), tx_hash)
    if isinstance(plan, RequestSucceeded):
        logger.info("CACHE HIT for %s", tx_hash)
        store.apply(plan)
        return store.get(tx_hash)

    key = (id(store), tx_hash)
    task = _inflight.get(key)
    if task is not None:
        logger.info("Joining in-flight fetch for %s", tx_hash)
    else:
        logger.info("CACHE MISS for %s", tx_hash)
        store.apply(request_started("transaction", tx_hash))
        task = asyncio.ensure_future(_run_plan(plan, store, client))
        _inflight[key] = task
        task.add_done_callback(lambda done: _finish_inflight(key, done))

    await asyncio.shield(task)
    return store.get(tx_hash)
