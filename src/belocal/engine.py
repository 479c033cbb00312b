# SPDX-License-Identifier: Apache-2.0
"""BeLocalEngine: the public entry point of the SDK.

Two layers of operations are offered:

* ``translate``, ``translate_many``, ``translate_request`` and
  ``translate_multi_request`` return result objects carrying the ok flag,
  the error and HTTP diagnostics.
* ``t``, ``t_many``, ``t_multi`` and their editable/managed variants return
  plain strings and fall back to the original text on any failure.

Invalid input (non-string texts, bad context) raises ``InvalidInputError``
in both layers before anything is sent.

Usage:
    async with BeLocalEngine.with_api_key("your-api-key") as engine:
        text = await engine.t("Hello", "fr")
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import replace
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from belocal.config import EngineConfig
from belocal.errors import BeLocalError, ErrorCode, InvalidInputError
from belocal.models import (
    CacheType,
    ContextKey,
    TranslateManyResult,
    TranslateResult,
    validate_context,
    validate_texts,
)
from belocal.request import TranslateRequest
from belocal.results import (
    many_result_from_response,
    multi_results_from_response,
    result_from_response,
)
from belocal.transport import Transport

logger = logging.getLogger(__name__)


def _align_texts(
    sent: Sequence[str],
    translated: Sequence[str | None],
    texts: Sequence[str],
) -> list[str | None]:
    """Place translations of ``sent`` into the slots of ``texts``.

    Requests that share an identifier hold the same texts, possibly in a
    different order, and only one of them is sent. Matching by source text
    gives each request its own order. Empty texts are never sent and get None.
    """
    pending: dict[str, list[str | None]] = {}
    for source, value in zip(sent, translated):
        pending.setdefault(source, []).append(value)

    aligned: list[str | None] = []
    for text in texts:
        queue = pending.get(text)
        aligned.append(queue.pop(0) if queue else None)
    return aligned



@runtime_checkable
class ProgressCallback(Protocol):
    """Called after each bulk batch with the number of texts done so far."""

    def __call__(self, stage: str, current: int, total: int) -> None: ...


class BeLocalEngine:
    """Translate texts through the BeLocal API."""

    DEFAULT_BULK_BATCH_SIZE = 50

    def __init__(self, transport: Transport) -> None:
        """Initialize BeLocalEngine.

        Args:
            transport: Transport used for every request.
        """
        self._transport = transport

    @classmethod
    def with_api_key(
        cls,
        api_key: str,
        timeout: float = 30.0,
        base_url: str | None = None,
    ) -> BeLocalEngine:
        """Create an engine with its own transport.

        Raises:
            ConfigurationError: If API key is not provided.
        """
        return cls(Transport(api_key, base_url=base_url, timeout=timeout))

    @classmethod
    def from_config(cls, config: EngineConfig) -> BeLocalEngine:
        """Create an engine from an ``EngineConfig``."""
        return cls.with_api_key(
            config.api_key, timeout=config.timeout, base_url=config.base_url
        )

    @classmethod
    def from_env(cls, env_file: Path | str | None = None) -> BeLocalEngine:
        """Create an engine from ``BELOCAL_*`` environment variables."""
        return cls.from_config(EngineConfig.from_env(env_file))

    @property
    def transport(self) -> Transport:
        """Transport used for every request."""
        return self._transport

    async def __aenter__(self) -> BeLocalEngine:
        """Enter async context manager."""
        await self._transport.__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager."""
        await self.close()

    async def close(self) -> None:
        """Release the transport session."""
        await self._transport.close()

    # ------------------------------------------------------------------
    # Result-returning operations
    # ------------------------------------------------------------------

    async def translate(
        self,
        text: str,
        lang: str,
        source_lang: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> TranslateResult:
        """Translate one text through the single-text endpoint.

        Args:
            text: Text to translate.
            lang: Target language code.
            source_lang: Source language code, or None for auto-detection.
            context: Request context (keys from ``ContextKey``).

        Returns:
            Translation result. Empty text or language gives a failed result
            without a network call.

        Raises:
            InvalidInputError: On non-string text or invalid context.
        """
        request = TranslateRequest((text,), lang, source_lang, context or {})
        if not text:
            return TranslateResult(
                None, False, BeLocalError(ErrorCode.INVALID_INPUT, "Text must not be empty")
            )
        if not lang:
            return TranslateResult(
                None, False, BeLocalError(ErrorCode.INVALID_INPUT, "Language must not be empty")
            )

        response = await self._transport.send(request.to_payload())
        return result_from_response(response)

    async def translate_many(
        self,
        texts: Sequence[str],
        lang: str,
        source_lang: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> TranslateManyResult:
        """Translate several texts through the batch endpoint.

        Each text becomes its own batch item keyed by its request identifier.
        Empty texts are not sent and keep a None slot. Texts with the same
        identifier are sent once.

        Args:
            texts: Texts to translate.
            lang: Target language code.
            source_lang: Source language code, or None for auto-detection.
            context: Request context shared by all texts.

        Returns:
            Result with one slot per input text, in input order.

        Raises:
            InvalidInputError: On non-string texts or invalid context.
        """
        texts = validate_texts(texts)
        ctx = validate_context(context)
        if not texts:
            return TranslateManyResult(
                [], False, BeLocalError(ErrorCode.INVALID_INPUT, "Texts must not be empty")
            )
        if not lang:
            return TranslateManyResult(
                [None] * len(texts),
                False,
                BeLocalError(ErrorCode.INVALID_INPUT, "Language must not be empty"),
            )

        request_ids: list[str | None] = []
        batch: list[dict[str, Any]] = []
        queued: set[str] = set()
        for text in texts:
            request = TranslateRequest((text,), lang, source_lang, ctx)
            if not text:
                request_ids.append(None)
                continue
            request_ids.append(request.request_id)
            if request.request_id in queued:
                continue
            queued.add(request.request_id)
            batch.append({"requestId": request.request_id, "payload": request.to_payload()})

        if not batch:
            return TranslateManyResult(list(request_ids), True)

        response = await self._transport.send_batch({"batch": batch})
        return many_result_from_response(request_ids, response)

    async def translate_request(self, request: TranslateRequest) -> TranslateManyResult:
        """Translate one ``TranslateRequest`` through the multi endpoint."""
        results = await self.translate_multi_request([request])
        return results[0]

    async def translate_multi_request(
        self,
        requests: Sequence[TranslateRequest],
    ) -> list[TranslateManyResult]:
        """Translate several requests in a single API call.

        Args:
            requests: Requests, possibly with different languages and contexts.

        Requests with the same identifier are sent once. Empty texts are not
        sent and keep a None slot.

        Returns:
            One result per request, in the order of ``requests``.

        Raises:
            InvalidInputError: If an item is not a ``TranslateRequest``.
        """
        for index, request in enumerate(requests):
            if not isinstance(request, TranslateRequest):
                raise InvalidInputError(
                    f"Expected TranslateRequest at index {index}, "
                    f"got {type(request).__name__}"
                )
        if not requests:
            return []

        # Requests with only empty texts are not sent
        sendable = [request for request in requests if any(request.texts)]
        items: dict[str, dict[str, Any]] = {}
        for request in sendable:
            items.setdefault(request.request_id, request.to_multi_item())

        result_map: dict[str, TranslateManyResult] = {}
        if items:
            response = await self._transport.send_multi({"requests": list(items.values())})
            result_map = multi_results_from_response(sendable, response)

        results: list[TranslateManyResult] = []
        for request in requests:
            if request.request_id not in items:
                results.append(TranslateManyResult([None] * len(request.texts), True))
                continue
            result = result_map[request.request_id]
            if result.texts is not None:
                sent = items[request.request_id]["texts"]
                result = replace(result, texts=_align_texts(sent, result.texts, request.texts))
            results.append(result)
        return results

    async def translate_bulk(
        self,
        texts: Sequence[str],
        lang: str,
        source_lang: str | None = None,
        context: Mapping[str, str] | None = None,
        batch_size: int = DEFAULT_BULK_BATCH_SIZE,
        progress_callback: ProgressCallback | None = None,
    ) -> list[str]:
        """Translate a long list of texts in consecutive batches.

        Failed batches and failed items keep their original text.

        Args:
            texts: Texts to translate.
            lang: Target language code.
            source_lang: Source language code, or None for auto-detection.
            context: Request context shared by all texts.
            batch_size: Maximum texts per batch request.
            progress_callback: Called with ``("translate", done, total)``
                after each batch.

        Returns:
            Translated texts, same order and length as input.

        Raises:
            InvalidInputError: On invalid texts, context or batch size.
        """
        texts = validate_texts(texts)
        validate_context(context)
        if batch_size <= 0:
            raise InvalidInputError(f"batch_size must be positive, got {batch_size}")

        total = len(texts)
        translated: list[str] = []
        for start in range(0, total, batch_size):
            chunk = texts[start : start + batch_size]
            result = await self.translate_many(chunk, lang, source_lang, context)
            translated.extend(self._fallback_many(chunk, result))
            if progress_callback:
                progress_callback("translate", len(translated), total)
        return translated

    # ------------------------------------------------------------------
    # Sugar operations (fall back to the original text)
    # ------------------------------------------------------------------

    async def t(
        self,
        text: str,
        lang: str,
        source_lang: str | None = None,
        user_context: str | None = None,
        cache_type: CacheType | str | None = None,
    ) -> str:
        """Translate one text, returning the original on failure.

        Args:
            text: Text to translate.
            lang: Target language code.
            source_lang: Source language code, or None for auto-detection.
            user_context: Free-form context sent as ``user_ctx``.
            cache_type: Optional ``cache_type`` context value.

        Returns:
            Translated text, or ``text`` unchanged on any failure.

        Raises:
            InvalidInputError: On non-string text or context values.
        """
        if not isinstance(text, str):
            raise InvalidInputError(f"Expected a string, got {type(text).__name__}")
        if not text:
            return text
        translated = await self.t_many([text], lang, source_lang, user_context, cache_type)
        return translated[0]

    async def t_editable(
        self,
        text: str,
        lang: str,
        source_lang: str | None = None,
        user_context: str | None = None,
    ) -> str:
        """``t`` with the ``editable`` cache type."""
        return await self.t(text, lang, source_lang, user_context, CacheType.EDITABLE)

    async def t_managed(
        self,
        text: str,
        lang: str,
        source_lang: str | None = None,
        user_context: str | None = None,
    ) -> str:
        """``t`` with the ``managed`` cache type."""
        return await self.t(text, lang, source_lang, user_context, CacheType.MANAGED)

    async def t_many(
        self,
        texts: Sequence[str],
        lang: str,
        source_lang: str | None = None,
        user_context: str | None = None,
        cache_type: CacheType | str | None = None,
    ) -> list[str]:
        """Translate several texts, falling back per text to the original.

        Returns:
            Translated texts, same order and length as input.

        Raises:
            InvalidInputError: On non-string texts or context values.
        """
        texts = validate_texts(texts)
        if not texts:
            return []
        context = self._sugar_context(user_context, cache_type)
        if not lang:
            logger.warning(
                "No target language given, keeping %d original text(s)", len(texts)
            )
            return list(texts)
        request = TranslateRequest(tuple(texts), lang, source_lang, context)
        result = await self.translate_request(request)
        return self._fallback_many(texts, result)

    async def t_many_editable(
        self,
        texts: Sequence[str],
        lang: str,
        source_lang: str | None = None,
        user_context: str | None = None,
    ) -> list[str]:
        """``t_many`` with the ``editable`` cache type."""
        return await self.t_many(texts, lang, source_lang, user_context, CacheType.EDITABLE)

    async def t_many_managed(
        self,
        texts: Sequence[str],
        lang: str,
        source_lang: str | None = None,
        user_context: str | None = None,
    ) -> list[str]:
        """``t_many`` with the ``managed`` cache type."""
        return await self.t_many(texts, lang, source_lang, user_context, CacheType.MANAGED)

    async def t_multi(self, requests: Sequence[TranslateRequest]) -> list[list[str]]:
        """Translate several requests, falling back to their original texts."""
        results = await self.translate_multi_request(requests)
        return [
            self._fallback_many(list(request.texts), result)
            for request, result in zip(requests, results)
        ]

    @staticmethod
    def _sugar_context(
        user_context: str | None,
        cache_type: CacheType | str | None,
    ) -> dict[str, str]:
        context: dict[str, Any] = {}
        if user_context is not None:
            context[ContextKey.USER_CONTEXT.value] = user_context
        if cache_type is not None:
            context[ContextKey.CACHE_TYPE.value] = cache_type
        return validate_context(context)

    @staticmethod
    def _fallback_many(originals: list[str], result: TranslateManyResult) -> list[str]:
        """Replace failed or missing slots with the original texts."""
        if not result.ok or result.texts is None:
            logger.warning(
                "Translation failed, keeping %d original text(s): %s",
                len(originals),
                result.error or "item error",
            )
            return list(originals)

        translated = result.texts
        merged: list[str] = []
        for index, original in enumerate(originals):
            value = translated[index] if index < len(translated) else None
            merged.append(value if isinstance(value, str) else original)
        return merged
