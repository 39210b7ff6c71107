from fastapi import HTTPException


def validate_tx_hash(tx_hash: str) -> str:
    tx_hash = tx_hash.strip()
    if not tx_hash:
        raise HTTPException(status_code=400, detail="Missing transaction hash.")
    if any(c.isspace() for c in tx_hash):
        raise HTTPException(status_code=400, detail="Invalid transaction hash. Must not contain whitespace.")
    return tx_hash


def validate_page(page: int) -> int:
    if page < 1:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid page {page}. Pages start at 1.",
        )
    return page
