# SPDX-License-Identifier: Apache-2.0
"""BeLocal translation API client.

Usage:
    from belocal import BeLocalEngine, TranslateRequest

    async with BeLocalEngine.with_api_key("your-api-key") as engine:
        # Sugar: returns the original text on failure
        text = await engine.t("Hello", "fr")

        # Full result with error details
        result = await engine.translate_many(["Hello", "Goodbye"], "fr")
        if result.ok:
            print(result.texts)
"""

__version__ = "0.1.0"

from belocal.config import EngineConfig
from belocal.engine import BeLocalEngine, ProgressCallback
from belocal.errors import (
    BeLocalError,
    BeLocalException,
    ConfigurationError,
    ErrorCode,
    InvalidInputError,
)
from belocal.models import (
    ALLOWED_CONTEXT_KEYS,
    CacheType,
    ContextKey,
    TranslateManyResult,
    TranslateResponse,
    TranslateResult,
    UserType,
)
from belocal.request import TranslateRequest, build_request_id
from belocal.transport import Transport

__all__ = [
    "__version__",
    # Engine and transport
    "BeLocalEngine",
    "Transport",
    "EngineConfig",
    # Requests
    "TranslateRequest",
    "build_request_id",
    "ContextKey",
    "ALLOWED_CONTEXT_KEYS",
    "UserType",
    "CacheType",
    # Results
    "TranslateResponse",
    "TranslateResult",
    "TranslateManyResult",
    "ProgressCallback",
    # Errors
    "ErrorCode",
    "BeLocalError",
    "BeLocalException",
    "InvalidInputError",
    "ConfigurationError",
]
