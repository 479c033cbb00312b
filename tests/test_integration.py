# SPDX-License-Identifier: Apache-2.0
"""Integration tests against the real BeLocal API.

These tests require network access and a valid API key.
Run with: RUN_INTEGRATION=1 BELOCAL_API_KEY=... pytest tests/test_integration.py
"""

import os

import pytest

from belocal import BeLocalEngine, TranslateRequest

pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_INTEGRATION") != "1" or not os.environ.get("BELOCAL_API_KEY"),
    reason="Integration tests disabled (set RUN_INTEGRATION=1 and BELOCAL_API_KEY to run)",
)


@pytest.mark.asyncio
async def test_real_translate() -> None:
    async with BeLocalEngine.from_env() as engine:
        result = await engine.translate("Hello", "fr", "en")
    assert result.ok, result.error
    assert result.text


@pytest.mark.asyncio
async def test_real_translate_many() -> None:
    texts = ["Hello", "Goodbye", "Thank you"]
    async with BeLocalEngine.from_env() as engine:
        result = await engine.translate_many(texts, "fr", "en")
    assert result.ok, result.error
    assert result.texts is not None
    assert len(result.texts) == len(texts)


@pytest.mark.asyncio
async def test_real_multi_request() -> None:
    requests = [
        TranslateRequest(["Hello world"], "es", "en", {"entity_key": "product", "entity_id": "123"}),
        TranslateRequest(["Good morning"], "de"),
    ]
    async with BeLocalEngine.from_env() as engine:
        results = await engine.translate_multi_request(requests)
    assert len(results) == 2
    assert all(result.ok for result in results)
