# SPDX-License-Identifier: Apache-2.0
"""
BeLocal - CLI Tool

Translates texts through the BeLocal API and prints one translation per line.

Usage:
    belocal-translate <text>... -t <lang> [options]

Examples:
    belocal-translate "Hello" -t fr                      # Basic translation
    belocal-translate "Hello" "Goodbye" -t de -s en      # Several texts
    belocal-translate "Product name" -t es --cache-type editable
    belocal-translate "Hello" -t fr --strict             # Fail instead of falling back
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import NoReturn

from belocal.config import EngineConfig
from belocal.engine import BeLocalEngine
from belocal.errors import BeLocalException
from belocal.models import CacheType, ContextKey
from belocal.request import TranslateRequest

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument Namespace.
    """
    parser = argparse.ArgumentParser(
        prog="belocal-translate",
        description="BeLocal translation tool - translates texts via the BeLocal API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s "Hello" -t fr                        # French
  %(prog)s "Hello" "Goodbye" -t de -s en        # English to German
  %(prog)s "Name" -t es --entity-key product --entity-id 123
  %(prog)s "Hello" -t fr --strict               # Exit 1 on failure

Environment Variables:
  BELOCAL_API_KEY   BeLocal API key (or use --api-key)
  BELOCAL_BASE_URL  API base URL (optional)
  BELOCAL_TIMEOUT   Request timeout in seconds (optional)
""",
    )

    parser.add_argument(
        "texts",
        nargs="+",
        help="Texts to translate",
    )

    # Language options
    parser.add_argument(
        "-t",
        "--target",
        required=True,
        help="Target language code",
    )
    parser.add_argument(
        "-s",
        "--source",
        default=None,
        help="Source language code (default: auto-detect)",
    )

    # Context options
    context_group = parser.add_argument_group("Context options")
    context_group.add_argument(
        "--user-context",
        help="Free-form context sent as user_ctx",
    )
    context_group.add_argument(
        "--cache-type",
        choices=[cache_type.value for cache_type in CacheType],
        help="Cache type for the translation",
    )
    context_group.add_argument(
        "--entity-key",
        help="Entity key (e.g. product)",
    )
    context_group.add_argument(
        "--entity-id",
        help="Entity id",
    )

    # Connection options
    api_group = parser.add_argument_group("API options")
    api_group.add_argument(
        "--api-key",
        help="BeLocal API key (or set BELOCAL_API_KEY)",
    )
    api_group.add_argument(
        "--base-url",
        help="API base URL (or set BELOCAL_BASE_URL)",
    )
    api_group.add_argument(
        "--timeout",
        type=float,
        help="Request timeout in seconds (default: 30)",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Report failures instead of printing the original text",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args(argv)


def build_context(args: argparse.Namespace) -> dict[str, str]:
    """Collect context options into a request context."""
    context: dict[str, str] = {}
    if args.user_context:
        context[ContextKey.USER_CONTEXT.value] = args.user_context
    if args.cache_type:
        context[ContextKey.CACHE_TYPE.value] = args.cache_type
    if args.entity_key:
        context[ContextKey.ENTITY_KEY.value] = args.entity_key
    if args.entity_id:
        context[ContextKey.ENTITY_ID.value] = args.entity_id
    return context


def load_config(args: argparse.Namespace) -> EngineConfig:
    """Merge command line options over environment configuration.

    Raises:
        ConfigurationError: If no API key is available.
    """
    if args.api_key:
        return EngineConfig(
            api_key=args.api_key,
            base_url=args.base_url,
            timeout=args.timeout if args.timeout is not None else 30.0,
        )

    config = EngineConfig.from_env()
    if args.base_url:
        config.base_url = args.base_url
    if args.timeout is not None:
        config.timeout = args.timeout
    return config


async def run(args: argparse.Namespace) -> int:
    """Execute translation.

    Args:
        args: Command line arguments.

    Returns:
        Exit code (0: success, 1: failure).
    """
    try:
        config = load_config(args)
        context = build_context(args)
        request = TranslateRequest(tuple(args.texts), args.target, args.source, context)
        engine = BeLocalEngine.from_config(config)
    except BeLocalException as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    async with engine:
        if not args.strict:
            translations = (await engine.t_multi([request]))[0]
            for text in translations:
                print(text)
            return 0

        result = await engine.translate_request(request)

    if not result.ok or result.texts is None:
        message = result.error.message if result.error else "translation failed"
        print(f"Error: {message}", file=sys.stderr)
        if result.http_code is not None:
            print(f"  HTTP status: {result.http_code}", file=sys.stderr)
        return 1

    for original, translated in zip(request.texts, result.texts):
        print(translated if translated is not None else original)
    return 0


def main() -> NoReturn:
    """Main entry point."""
    args = parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    exit_code = asyncio.run(run(args))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
