"""
Path configuration and constants for the deck → PDF exporter.

Defaults mirror the layout the exporter is run from: a tool directory that
sits next to ``presentations/`` and ``pdfs/``, with the repository root
(``..``) served over HTTP.
"""

from pathlib import Path
import os


def env_int(name: str, default: int) -> int:
    """Read an integer override from the environment."""
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


# ── Static server ────────────────────────────────────────────────────
PORT = env_int("DECKPRINT_PORT", 8125)
HOST = os.environ.get("DECKPRINT_HOST", "localhost")

# ── Paths (relative to the working directory) ────────────────────────
SERVE_ROOT = Path(os.environ.get("DECKPRINT_SERVE_ROOT", ".."))
DECKS_DIR = Path(os.environ.get("DECKPRINT_DECKS_DIR", str(SERVE_ROOT / "presentations")))
PDF_DIR = Path(os.environ.get("DECKPRINT_PDF_DIR", str(SERVE_ROOT / "pdfs")))
DECK_PATTERN = "*.html"

# ── Rendering ────────────────────────────────────────────────────────
VIEWPORT_WIDTH = 1920
VIEWPORT_HEIGHT = 1080
PAGE_FORMAT = "A4"
PRINT_QUERY = "print-pdf"
READY_FLAG = "revealLoaded"  # set by the deck once print layout is final

# Bounds both the readiness wait and the PDF export, per deck
TIMEOUT_MS = env_int("DECKPRINT_TIMEOUT_MS", 120_000)

# "networkidle2": at most this many requests open for NETWORK_IDLE_MS
NETWORK_IDLE_MAX_INFLIGHT = 2
NETWORK_IDLE_MS = 500
