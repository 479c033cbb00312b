# SPDX-License-Identifier: Apache-2.0
"""Translation requests and deterministic request identifiers."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from belocal.models import validate_context, validate_texts


def _canonical_json(value: Any) -> str:
    """Compact JSON matching the encoding used by the other BeLocal SDKs.

    Identifiers agree for ordinary input. Texts are sorted by code point, so
    numeric strings like "9" and "10" do not sort numerically, and U+2028
    and U+2029 are not escaped. Identifiers for such input may differ.
    """
    encoded = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    # Slashes only occur inside string literals.
    return encoded.replace("/", "\\/")


def build_request_id(
    texts: Sequence[str],
    lang: str,
    source_lang: str | None = None,
    context: Mapping[str, str] | None = None,
) -> str:
    """Build a deterministic identifier for a translation request.

    Texts are sorted and the context is sorted by key before hashing, so the
    identifier does not depend on the order the caller supplied them in.
    The inputs are not modified.

    Args:
        texts: Texts to translate.
        lang: Target language code.
        source_lang: Source language code, or None for auto-detection.
        context: Request context.

    Returns:
        32-character hex digest.
    """
    sorted_texts = sorted(texts)
    sorted_context = dict(sorted((context or {}).items()))

    try:
        payload = _canonical_json(
            [sorted_texts, lang, source_lang, sorted_context or []]
        ).encode("utf-8")
    except (TypeError, ValueError):
        # UnicodeEncodeError (lone surrogates) lands here as well
        payload = (
            "".join(sorted_texts) + lang + (source_lang or "") + repr(sorted_context)
        ).encode("utf-8", errors="surrogatepass")

    return hashlib.md5(payload, usedforsecurity=False).hexdigest()


@dataclass(frozen=True)
class TranslateRequest:
    """A group of texts translated with the same language and context.

    Validation happens on construction and raises ``InvalidInputError``.
    The request identifier is derived once from the content.

    Attributes:
        texts: Texts to translate, in caller order.
        lang: Target language code.
        source_lang: Source language code, or None for auto-detection.
        context: Read-only request context.
        request_id: Deterministic identifier (see ``build_request_id``).
    """

    texts: tuple[str, ...]
    lang: str
    source_lang: str | None = None
    context: Mapping[str, str] = field(default_factory=dict, hash=False)
    request_id: str = field(init=False)

    def __post_init__(self) -> None:
        texts = tuple(validate_texts(self.texts))
        context = validate_context(self.context)
        object.__setattr__(self, "texts", texts)
        object.__setattr__(self, "context", MappingProxyType(context))
        object.__setattr__(
            self,
            "request_id",
            build_request_id(texts, self.lang, self.source_lang, context),
        )

    def _common_fields(self) -> dict[str, Any]:
        data: dict[str, Any] = {"lang": self.lang}
        if self.source_lang:
            data["source_lang"] = self.source_lang
        if self.context:
            data["ctx"] = dict(self.context)
        return data

    def to_multi_item(self) -> dict[str, Any]:
        """Build the entry sent in a multi request.

        Empty texts are left out. They still count toward ``request_id``.
        """
        data: dict[str, Any] = {
            "request_id": self.request_id,
            "texts": [text for text in self.texts if text],
        }
        data.update(self._common_fields())
        return data

    def to_payload(self) -> dict[str, Any]:
        """Build the single-text payload.

        Raises:
            ValueError: If the request does not hold exactly one text.
        """
        if len(self.texts) != 1:
            raise ValueError(
                f"Single-text payload needs exactly one text, got {len(self.texts)}"
            )
        data: dict[str, Any] = {"text": self.texts[0]}
        data.update(self._common_fields())
        return data
