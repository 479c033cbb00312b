#!/usr/bin/env python3
# SPDX-License-Identifier: Apache-2.0
"""BeLocal SDK sample script.

Shows the sugar methods, result handling, a caller-side retry loop and
bulk translation with progress reporting.

Usage:
    cd examples
    python translate_texts.py

Environment variables (loaded from .env automatically):
    BELOCAL_API_KEY: required
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

# Project root on sys.path (development use)
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

load_dotenv(PROJECT_ROOT / ".env")

from belocal import (  # noqa: E402
    BeLocalEngine,
    ErrorCode,
    TranslateManyResult,
    TranslateRequest,
)

# =============================================================================
# Settings
# =============================================================================

TARGET_LANG = "fr"
SOURCE_LANG = "en"
MAX_RETRIES = 3

logger = logging.getLogger(__name__)


async def translate_with_retry(
    engine: BeLocalEngine,
    texts: list[str],
    lang: str,
    max_retries: int = MAX_RETRIES,
) -> TranslateManyResult:
    """Retry network failures with linear backoff."""
    result = await engine.translate_many(texts, lang, SOURCE_LANG)
    for attempt in range(1, max_retries):
        if result.ok or result.error is None or result.error.code != ErrorCode.NETWORK:
            break
        logger.warning("Network error, retrying (%d/%d)", attempt, max_retries - 1)
        await asyncio.sleep(attempt)
        result = await engine.translate_many(texts, lang, SOURCE_LANG)
    return result


def print_progress(stage: str, current: int, total: int, message: str = "") -> None:
    print(f"  {stage}: {current}/{total}")


async def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    async with BeLocalEngine.from_env() as engine:
        print("=== t() ===")
        print(await engine.t("Hello, world!", TARGET_LANG, SOURCE_LANG))
        print(await engine.t_editable("Product description", TARGET_LANG, SOURCE_LANG, "product-123"))

        print("=== translate_many() with retry ===")
        texts = ["Hello", "Goodbye", "Thank you"]
        result = await translate_with_retry(engine, texts, TARGET_LANG)
        if result.ok and result.texts:
            for original, translated in zip(texts, result.texts):
                print(f"  {original} -> {translated or original}")
        else:
            print(f"  Failed: {result.error} (HTTP {result.http_code})")

        print("=== translate_multi_request() ===")
        requests = [
            TranslateRequest(["Hello world", "How are you?"], "es", "en", {"entity_key": "product", "entity_id": "123"}),
            TranslateRequest(["Good morning", "Thank you"], "fr", None, {"entity_key": "product", "entity_id": "456"}),
            TranslateRequest(["Welcome"], "de", "en"),
        ]
        for request, res in zip(requests, await engine.translate_multi_request(requests)):
            status = "ok" if res.ok else f"failed: {res.error}"
            print(f"  {request.request_id} [{request.lang}] {status} {res.texts}")

        print("=== translate_bulk() ===")
        items = [f"Item number {i}" for i in range(1, 26)]
        translated = await engine.translate_bulk(
            items, TARGET_LANG, SOURCE_LANG, batch_size=10, progress_callback=print_progress
        )
        print(f"  {len(translated)} items translated")

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
