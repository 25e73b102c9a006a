"""
Command-Line Interface for gemini-tts-mcp.

Starts the MCP server on stdio, which is how MCP hosts launch it. The
listing flags print the configured voices/styles without starting the
server, which is handy when editing the config document.

Usage Examples:
    # Run the MCP server (stdio)
    gemini-tts-mcp

    # Use a custom voice/style document and chattier logs
    gemini-tts-mcp --config ~/tts-styles.yaml --log-level verbose

    # Inspect the configuration
    gemini-tts-mcp --list-voices
    gemini-tts-mcp --list-styles --detail

    # Same entry point as a module
    python -m gemini_tts_mcp

Host Configuration (e.g. claude_desktop_config.json):
    {
      "mcpServers": {
        "gemini-tts": {
          "command": "gemini-tts-mcp",
          "env": {"GOOGLE_API_KEY": "..."}
        }
      }
    }

Environment Variables:
    GOOGLE_API_KEY: API credential (required for generate)
    GOOGLE_VOICE: Default voice
    GEMINI_TTS_CONFIG: Voice/style document path
    GEMINI_TTS_LOG_LEVEL: 1-4 or a level name

Exit Codes:
    0: clean shutdown or listing printed
    1: startup failure (bad settings, server could not start)
"""

from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from typing import List, Optional

from gemini_tts_mcp import __version__
from gemini_tts_mcp.core.config import ConfigValidationError, Defaults, load_settings
from gemini_tts_mcp.core.logging import configure_logging, fail, get_logger, info
from gemini_tts_mcp.core.proxy import apply_proxy_environment
from gemini_tts_mcp.services.speech_service import SpeechService


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Optional list of arguments (defaults to sys.argv).

    Returns:
        Parsed argument namespace with all CLI options.
    """
    parser = argparse.ArgumentParser(
        prog="gemini-tts-mcp",
        description="Gemini text-to-speech MCP server (stdio)",
    )

    parser.add_argument("--config", metavar="PATH",
                        help=f"Voice/style config document (overrides ${Defaults.CONFIG_ENV})")
    parser.add_argument("--log-level", metavar="LEVEL",
                        help="1-4 or minimal/normal/verbose/debug")
    parser.add_argument("--no-proxy", action="store_true",
                        help="Skip system proxy discovery")

    # Inspection modes (no server)
    parser.add_argument("--list-voices", action="store_true",
                        help="Print configured voices as JSON and exit")
    parser.add_argument("--list-styles", action="store_true",
                        help="Print style templates as JSON and exit")
    parser.add_argument("--detail", action="store_true",
                        help="Include full prompts with --list-styles")

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Orchestrates the CLI workflow:
        1. Parse arguments and export --config for every reader
        2. Configure logging (stderr only)
        3. Load settings
        4. Handle listing modes (if requested)
        5. Discover the system proxy
        6. Serve MCP over stdio until the host disconnects

    Args:
        argv: Optional list of command-line arguments.

    Returns:
        Exit code (0 for success, 1 for startup failure).
    """
    args = _parse_args(argv)

    # logging reads its section from the same document
    if args.config:
        os.environ[Defaults.CONFIG_ENV] = args.config

    configure_logging(level=args.log_level, force=True)
    log = get_logger("gemini-tts-mcp.cli")

    try:
        settings = load_settings()
    except ConfigValidationError as e:
        fail(log, "invalid_settings", error=str(e))
        print(f"gemini-tts-mcp: {e}", file=sys.stderr)
        return 1

    service = SpeechService(settings)

    if args.list_voices or args.list_styles:
        if args.list_voices:
            voices = [voice.to_dict() for voice in service.list_voices()]
            print(json.dumps(voices, indent=2, ensure_ascii=False))
        if args.list_styles:
            print(json.dumps(service.list_styles(detail=args.detail), indent=2, ensure_ascii=False))
        return 0

    if not settings.has_credentials:
        # listings still work; generate reports the missing key per call
        info(log, "no_api_key", hint="set GOOGLE_API_KEY to enable generate")

    if not args.no_proxy:
        apply_proxy_environment()

    from gemini_tts_mcp.api.server import create_server, run_stdio

    try:
        server = create_server(service)
        asyncio.run(run_stdio(server))
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        fail(log, "server_failed", error=str(e), exc_type=type(e).__name__)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
