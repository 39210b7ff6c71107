"""Fetch one page of the transaction list from both chains."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from app.cache.manager import TransactionStore, tx_store
from app.commands import request_failed, request_started, request_succeeded
from app.config import settings
from app.fetchers.errors import NetworkFailure, PartialAggregateFailure
from app.fetchers.http import get_json, new_client
from app.models.transaction import ChainTransactions, ListPage, RequestState

logger = logging.getLogger(__name__)

SUCCESSOR_COLLECTION_FIELD = "items"


def list_urls(page: int) -> tuple[tuple[str, str], ...]:
    return (
        ("neo2", f"{settings.base_url()}/transactions/{page}"),
        ("neo3", f"{settings.base_url(settings.successor_chain)}/transactions/{page}"),
    )


def normalize_successor_page(body: dict[str, Any]) -> dict[str, Any]:
    normalized = dict(body)
    items = body.get(SUCCESSOR_COLLECTION_FIELD)
    normalized["transactions"] = [] if items is None else items
    return normalized


def parse_chain_body(member: str, body: dict[str, Any]) -> ChainTransactions:
    if member == "neo3":
        body = normalize_successor_page(body)
    return ChainTransactions.model_validate(body)


def build_list_page(page: int, neo2: dict[str, Any], neo3: dict[str, Any]) -> ListPage:
    return ListPage(
        page=page,
        neo2=parse_chain_body("neo2", neo2),
        neo3=parse_chain_body("neo3", neo3),
    )


async def _fetch_chains(client: httpx.AsyncClient, page: int) -> list[ChainTransactions]:
    chains = []
    for member, url in list_urls(page):
        try:
            body = await get_json(client, url)
            try:
                chains.append(parse_chain_body(member, body))
            except ValidationError as exc:
                raise NetworkFailure(
                    url, f"unexpected response shape ({exc.error_count()} errors)"
                ) from exc
        except NetworkFailure as exc:
            raise PartialAggregateFailure(member, exc) from exc
    return chains


async def fetch_transactions(
    page: int = 1,
    store: TransactionStore = tx_store,
    client: httpx.AsyncClient | None = None,
) -> RequestState:
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise ValueError(f"page must be a positive integer, got {page!r}")

    store.apply(request_started("list", page))
    try:
        if client is None:
            async with new_client() as own_client:
                neo2, neo3 = await _fetch_chains(own_client, page)
        else:
            neo2, neo3 = await _fetch_chains(client, page)
    except NetworkFailure as exc:
        logger.warning("Transaction list fetch failed for page %d: %s", page, exc)
        store.apply(request_failed("list", page, exc))
        return store.page_state(page)

    list_page = ListPage(page=page, neo2=neo2, neo3=neo3)
    store.apply(request_succeeded("list", page, list_page))
    logger.info(
        "Fetched transaction list page %d (neo2=%d, neo3=%d)",
        page,
        len(neo2.transactions),
        len(neo3.transactions),
    )
    return store.page_state(page)
