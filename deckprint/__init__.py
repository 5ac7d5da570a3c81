"""
deckprint — batch-export HTML slide decks to PDF.

Serves the deck tree locally, opens every deck in headless Chromium with the
``?print-pdf`` flag, waits for the deck's readiness flag and prints an A4 PDF.
"""

from deckprint.config import PORT, DECKS_DIR, PDF_DIR, SERVE_ROOT
from deckprint.decks import Deck, list_decks
from deckprint.server import serve_static, start_static_server, stop_static_server
from deckprint.converter import (
    DeckExportError,
    DeckExportTimeout,
    DeckNavigationError,
    PrintOptions,
    convert_deck,
)
from deckprint.pipeline import JobResult, RunConfig, RunContext, generate_pdfs, run

__all__ = [
    "Deck",
    "list_decks",
    "serve_static",
    "start_static_server",
    "stop_static_server",
    "PrintOptions",
    "convert_deck",
    "DeckExportError",
    "DeckExportTimeout",
    "DeckNavigationError",
    "RunConfig",
    "RunContext",
    "JobResult",
    "generate_pdfs",
    "run",
    "PORT",
    "DECKS_DIR",
    "PDF_DIR",
    "SERVE_ROOT",
]
