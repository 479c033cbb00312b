# SPDX-License-Identifier: Apache-2.0
"""Build results from response envelopes.

These functions never raise. Whatever the server returns, the caller gets a
complete result with one slot per input, and None wherever nothing usable
came back.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from belocal.errors import BeLocalError, ErrorCode
from belocal.models import TranslateManyResult, TranslateResponse, TranslateResult
from belocal.request import TranslateRequest

logger = logging.getLogger(__name__)

STATUS_ERROR = "error"


def _is_error_status(data: Any) -> bool:
    return isinstance(data, dict) and data.get("status") == STATUS_ERROR


def _results_list(response: TranslateResponse) -> list[Any] | None:
    body = response.body
    if not response.ok or not isinstance(body, dict):
        return None
    results = body.get("results")
    return results if isinstance(results, list) else None


def _schema_error(response: TranslateResponse) -> BeLocalError | None:
    """Envelope error, or a schema error when an ok envelope lacks results."""
    if not response.ok:
        return response.error
    return BeLocalError(ErrorCode.API_SCHEMA, "Response body has no results list")


def result_from_response(response: TranslateResponse) -> TranslateResult:
    """Build a single-text result.

    The text is taken only when the body has a string ``text`` and a
    ``status`` other than ``"error"``.
    """
    body = response.body if isinstance(response.body, dict) else {}
    ok = response.ok
    text = body.get("text")
    status = body.get("status")

    if status == STATUS_ERROR:
        ok = False
    if not isinstance(text, str) or status is None or status == STATUS_ERROR:
        text = None

    return TranslateResult(
        text,
        ok,
        response.error,
        response.http_code,
        response.errno,
        response.raw,
    )


def many_result_from_response(
    request_ids: Sequence[str | None],
    response: TranslateResponse,
) -> TranslateManyResult:
    """Match batch results back to the submitted identifiers.

    Args:
        request_ids: One identifier per input text, in input order. None
            marks a slot that was not sent (empty text).
        response: Envelope from ``Transport.send_batch``.

    Returns:
        Result whose ``texts`` follow ``request_ids`` order, whatever order
        the server answered in.
    """
    results = _results_list(response)
    if results is None:
        return TranslateManyResult(
            [None] * len(request_ids),
            False,
            _schema_error(response),
            response.http_code,
            response.errno,
            response.raw,
        )

    ok = True
    text_map: dict[str, str] = {}
    for item in results:
        if not isinstance(item, dict):
            continue
        data = item.get("data")
        if _is_error_status(data):
            ok = False
            continue
        request_id = item.get("requestId")
        if (
            isinstance(request_id, str)
            and isinstance(data, dict)
            and isinstance(data.get("text"), str)
            and data.get("status") is not None
        ):
            text_map[request_id] = data["text"]

    texts = [
        text_map.get(request_id) if request_id is not None else None
        for request_id in request_ids
    ]

    return TranslateManyResult(
        texts,
        ok,
        response.error,
        response.http_code,
        response.errno,
        response.raw,
    )


def multi_results_from_response(
    requests: Sequence[TranslateRequest],
    response: TranslateResponse,
) -> dict[str, TranslateManyResult]:
    """Build one result per submitted request from a multi response.

    Requests missing from the response get a failed result carrying the
    envelope error, or an ``UNCAUGHT`` error when the envelope itself was ok.

    Args:
        requests: Requests that were sent.
        response: Envelope from ``Transport.send_multi``.

    Returns:
        Mapping of request identifier to result, covering every request.
    """
    submitted = {request.request_id for request in requests}
    result_map: dict[str, TranslateManyResult] = {}

    for item in _results_list(response) or []:
        if not isinstance(item, dict):
            continue
        request_id = item.get("request_id")
        data = item.get("data")
        if not isinstance(request_id, str) or not isinstance(data, dict):
            continue
        if request_id not in submitted:
            continue

        texts = data.get("texts")
        ok = not _is_error_status(data)
        if isinstance(texts, list):
            texts = [text if isinstance(text, str) else None for text in texts]
        else:
            texts = None
            ok = False

        result_map[request_id] = TranslateManyResult(
            texts,
            ok,
            None,
            response.http_code,
            response.errno,
            response.raw,
        )

    for request in requests:
        if request.request_id in result_map:
            continue
        if response.ok:
            error = BeLocalError(
                ErrorCode.UNCAUGHT,
                f"Missing result for request_id {request.request_id}",
            )
            logger.debug("No result returned for request_id %s", request.request_id)
        else:
            error = response.error
        result_map[request.request_id] = TranslateManyResult(
            None,
            False,
            error,
            response.http_code,
            response.errno,
            response.raw,
        )

    return result_map
