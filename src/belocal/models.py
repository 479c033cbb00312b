# SPDX-License-Identifier: Apache-2.0
"""Data models shared by the transport, the reconciler and the engine.

The transport wraps every outcome in a ``TranslateResponse`` envelope.
The reconciler turns an envelope into ``TranslateResult`` (one text) or
``TranslateManyResult`` (a list of texts, one slot per input).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from belocal.errors import BeLocalError, InvalidInputError


class ContextKey(str, Enum):
    """Keys accepted in a request context."""

    USER_TYPE = "user_type"
    USER_CONTEXT = "user_ctx"
    CACHE_TYPE = "cache_type"
    ENTITY_KEY = "entity_key"
    ENTITY_ID = "entity_id"


ALLOWED_CONTEXT_KEYS: frozenset[str] = frozenset(key.value for key in ContextKey)


class UserType(str, Enum):
    """Well-known values for ``user_type``."""

    PRODUCT = "product"
    CHAT = "chat"


class CacheType(str, Enum):
    """Well-known values for ``cache_type``.

    Editable and managed translations are kept by the server so they can be
    corrected later.
    """

    EDITABLE = "editable"
    MANAGED = "managed"


def validate_texts(texts: Any) -> list[str]:
    """Check that ``texts`` is a sequence of strings.

    Args:
        texts: Candidate list of texts.

    Returns:
        The texts as a new list.

    Raises:
        InvalidInputError: If ``texts`` is not a sequence or holds a non-string.
    """
    if isinstance(texts, (str, bytes)) or not isinstance(texts, Sequence):
        raise InvalidInputError(
            f"Expected a sequence of strings, got {type(texts).__name__}"
        )
    for index, text in enumerate(texts):
        if not isinstance(text, str):
            raise InvalidInputError(
                f"Expected a sequence of strings, but element at index {index} "
                f"is {type(text).__name__}"
            )
    return list(texts)


def validate_context(context: Mapping[Any, Any] | None) -> dict[str, str]:
    """Check context keys and values and normalize them to plain strings.

    Args:
        context: Context mapping, or None for an empty context.

    Returns:
        A new dict with string keys and values.

    Raises:
        InvalidInputError: On a non-string key or value, or a key outside
            ``ALLOWED_CONTEXT_KEYS``.
    """
    if context is None:
        return {}
    if not isinstance(context, Mapping):
        raise InvalidInputError(
            f"Context must be a mapping, got {type(context).__name__}"
        )

    normalized: dict[str, str] = {}
    for key, value in context.items():
        if isinstance(key, Enum):
            key = key.value
        if isinstance(value, Enum):
            value = value.value
        if not isinstance(key, str) or not isinstance(value, str):
            raise InvalidInputError(
                f'Context keys and values must be strings, but key "{key}" is '
                f'{type(key).__name__} and value "{value}" is {type(value).__name__}'
            )
        if key not in ALLOWED_CONTEXT_KEYS:
            raise InvalidInputError(
                f'Unknown context key "{key}". Allowed keys: '
                f"{', '.join(k.value for k in ContextKey)}"
            )
        normalized[key] = value
    return normalized


@dataclass(frozen=True)
class TranslateResponse:
    """Envelope around one HTTP exchange.

    Attributes:
        body: Decoded JSON object, None on failure.
        ok: True when the request went through and the body decoded.
        error: Failure description, None when ok.
        http_code: HTTP status, None when no response was received.
        errno: Low-level OS error number for network failures.
        raw: Raw response text for diagnostics.
    """

    body: dict[str, Any] | None
    ok: bool
    error: BeLocalError | None = None
    http_code: int | None = None
    errno: int | None = None
    raw: str | None = None


@dataclass(frozen=True)
class TranslateResult:
    """Result of a single-text translation."""

    text: str | None
    ok: bool
    error: BeLocalError | None = None
    http_code: int | None = None
    errno: int | None = None
    raw: str | None = None


@dataclass(frozen=True)
class TranslateManyResult:
    """Result of a multi-text translation.

    ``texts`` has one slot per input text, in input order. A slot is None
    when that item failed or was not sent.
    """

    texts: list[str | None] | None
    ok: bool
    error: BeLocalError | None = None
    http_code: int | None = None
    errno: int | None = None
    raw: str | None = None
