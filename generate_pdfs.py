#!/usr/bin/env python3
"""
Slide deck → PDF exporter.

Serves the repository root on a local port, opens every deck in headless
Chromium with ?print-pdf, waits for window.revealLoaded and writes one A4 PDF
per deck.

Usage:
    python generate_pdfs.py                          # ../presentations → ../pdfs on :8125
    python generate_pdfs.py --out build/pdfs         # Custom output directory
    python generate_pdfs.py --no-wait-ready          # Skip the readiness flag
    python generate_pdfs.py --timeout 300 -v         # Slow decks, debug logs
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from playwright.async_api import Error as PlaywrightError

from deckprint.config import (
    DECK_PATTERN,
    DECKS_DIR,
    HOST,
    PDF_DIR,
    PORT,
    READY_FLAG,
    SERVE_ROOT,
    TIMEOUT_MS,
)
from deckprint.converter import PrintOptions
from deckprint.pipeline import RunConfig, generate_pdfs, summarize
from deckprint.server import ServerBindError

log = logging.getLogger("generate_pdfs")

# Fatal start-up failure: nothing was exported
EXIT_FATAL = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Export HTML slide decks to PDF with headless Chromium",
    )
    parser.add_argument("--port", type=int, default=PORT, help=f"Static server port (default: {PORT})")
    parser.add_argument("--host", default=HOST, help=f"Static server host (default: {HOST})")
    parser.add_argument("--root", type=Path, default=SERVE_ROOT, help="Directory served over HTTP")
    parser.add_argument("--decks", type=Path, default=DECKS_DIR, help="Directory containing the decks")
    parser.add_argument("--pattern", default=DECK_PATTERN, help=f"Deck glob (default: {DECK_PATTERN})")
    parser.add_argument("--out", type=Path, default=PDF_DIR, help="Output directory for PDFs")
    parser.add_argument(
        "--timeout", type=float, default=TIMEOUT_MS / 1000,
        help="Per-deck readiness and export timeout in seconds (0 = no limit)",
    )
    parser.add_argument("--ready-flag", default=READY_FLAG, help="Window flag the deck sets when ready")
    parser.add_argument("--no-wait-ready", action="store_true", help="Do not wait for the readiness flag")
    parser.add_argument(
        "--wait-until", default="networkidle2",
        choices=["load", "domcontentloaded", "networkidle", "networkidle2"],
        help="Navigation completion event (default: networkidle2, at most 2 open requests)",
    )
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> RunConfig:
    options = PrintOptions(
        ready_flag=None if args.no_wait_ready else args.ready_flag,
        wait_until=args.wait_until,
        timeout_ms=int(args.timeout * 1000),
    )
    return RunConfig(
        serve_root=args.root,
        decks_dir=args.decks,
        pattern=args.pattern,
        output_dir=args.out,
        host=args.host,
        port=args.port,
        headless=not args.headed,
        options=options,
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s  %(name)s  %(message)s",
    )
    config = config_from_args(args)

    try:
        results = asyncio.run(generate_pdfs(config))
    except ServerBindError as e:
        log.error("Could not start static server on port %d: %s", config.port, e)
        return EXIT_FATAL
    except OSError as e:
        log.error("Run aborted: %s", e)
        return EXIT_FATAL
    except PlaywrightError as e:
        log.error("Browser failed: %s", e)
        return EXIT_FATAL

    return summarize(results)


if __name__ == "__main__":
    sys.exit(main())
