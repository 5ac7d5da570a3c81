"""
Deck discovery — finds the HTML slide decks to export.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from deckprint.config import DECK_PATTERN

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Deck:
    path: Path  # source .html file

    @property
    def name(self) -> str:
        """Base name without extension: used for the URL and the PDF file."""
        return self.path.stem

    def url_path(self, root: Path) -> str:
        """Path of the deck relative to the served root, as a clean URL.

        ``<root>/presentations/intro.html`` → ``presentations/intro``. Only
        ``.html`` is dropped; the server adds nothing else back.
        """
        rel_path = self.path.resolve().relative_to(Path(root).resolve())
        if rel_path.suffix == ".html":
            rel_path = rel_path.with_suffix("")
        return rel_path.as_posix()

    def pdf_path(self, output_dir: Path) -> Path:
        return Path(output_dir) / f"{self.name}.pdf"


def list_decks(directory: Path, pattern: str = DECK_PATTERN) -> list[Deck]:
    """Scan *directory* (non-recursively) for decks matching *pattern*.

    A missing directory is treated like an empty one.
    """
    directory = Path(directory)
    if not directory.is_dir():
        log.warning("Deck directory not found: %s", directory)
        return []

    decks = [Deck(p) for p in sorted(directory.glob(pattern)) if p.is_file()]
    for deck in decks:
        log.info("Found deck %s", deck.path)
    if not decks:
        log.info("No decks matching %s in %s", pattern, directory)
    return decks
