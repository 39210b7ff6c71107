import logging

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from app.cache.manager import tx_store
from app.fetchers import clear_list, fetch_transaction, fetch_transactions, reset_cache
from app.validation.input import validate_page, validate_tx_hash

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("app.main")

app = FastAPI(title="Explorer Transaction Cache API", version="0.1.0")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("INCOMING REQUEST: %s %s", request.method, request.url.path)
    response = await call_next(request)
    logger.info(
        "RESPONSE: %s %s -> %s",
        request.method,
        request.url.path,
        response.status_code,
    )
    return response


@app.get("/v1/transaction/{tx_hash}")
async def get_transaction(tx_hash: str):
    tx_hash = validate_tx_hash(tx_hash)
    state = await fetch_transaction(tx_hash)

    if state.status == "failed":
        logger.warning("Transaction %s failed: %s", tx_hash, state.error)
        raise HTTPException(
            status_code=502,
            detail={"error": str(state.error), "tx_hash": tx_hash},
        )
    return {"tx_hash": tx_hash, **state.model_dump(mode="json")}


@app.delete("/v1/transaction")
async def reset_transactions():
    reset_cache()
    logger.info("Transaction cache reset")
    return JSONResponse(content={"cached": len(tx_store)})


@app.get("/v1/transactions/state")
async def transactions_state():
    return tx_store.list_state().model_dump(mode="json")


@app.get("/v1/transactions")
async def get_transactions(page: int = Query(default=1)):
    page = validate_page(page)
    state = await fetch_transactions(page)

    if state.status == "failed":
        logger.warning("Transaction list page %d failed: %s", page, state.error)
        raise HTTPException(
            status_code=502,
            detail={"error": str(state.error), "page": page},
        )
    return tx_store.list_state().model_dump(mode="json")


@app.delete("/v1/transactions")
async def clear_transactions():
    clear_list()
    logger.info("Transaction list cleared")
    return tx_store.list_state().model_dump(mode="json")
