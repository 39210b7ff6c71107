from app.cache.manager import tx_store
from app.commands import request_succeeded
from app.display.converters import convert_value, register_converter


async def test_no_converter_returns_raw():
    assert await convert_value("hash160", "abc") == "abc"


async def test_sync_converter():
    register_converter("hash160", lambda value: value.upper())
    assert await convert_value("hash160", "abc") == "ABC"


async def test_async_converter():
    async def to_address(value: str) -> str:
        return f"N{value}"

    register_converter("hash160", to_address)
    assert await convert_value("hash160", "abc") == "Nabc"


async def test_empty_result_falls_back():
    register_converter("bytestring", lambda value: None)
    assert await convert_value("bytestring", "00ff") == "00ff"


async def test_unregister():
    register_converter("hash160", lambda value: "converted")
    register_converter("hash160", None)
    assert await convert_value("hash160", "abc") == "abc"


async def test_conversion_does_not_touch_cache():
    tx_store.apply(request_succeeded("transaction", "0x1", {"sender": "abc"}))
    register_converter("hash160", lambda value: "converted")

    await convert_value("hash160", tx_store.cached("0x1")["sender"])

    assert tx_store.cached("0x1") == {"sender": "abc"}
