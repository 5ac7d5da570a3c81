"""
Unit tests for deck discovery and configuration.
"""
import pytest
from pathlib import Path

from deckprint.config import env_int
from deckprint.decks import Deck, list_decks


class TestDeck:
    """Tests for the Deck reference."""

    def test_name_strips_extension(self):
        assert Deck(Path("presentations/intro.html")).name == "intro"

    def test_url_path_is_relative_clean_url(self, site, make_deck):
        deck = Deck(make_deck(site / "presentations", "intro"))
        assert deck.url_path(site) == "presentations/intro"

    def test_url_path_keeps_other_extensions(self, site):
        deck = Deck(site / "presentations" / "b.htm")
        assert deck.url_path(site) == "presentations/b.htm"

    def test_url_path_outside_root(self, tmp_path, site):
        other = tmp_path.parent / "elsewhere.html"
        with pytest.raises(ValueError):
            Deck(other).url_path(site)

    def test_pdf_path(self, tmp_path):
        deck = Deck(Path("presentations/outro.html"))
        assert deck.pdf_path(tmp_path / "pdfs") == tmp_path / "pdfs" / "outro.pdf"


class TestListDecks:
    """Tests for list_decks."""

    def test_finds_matching_files(self, site, make_deck):
        decks_dir = site / "presentations"
        make_deck(decks_dir, "outro")
        make_deck(decks_dir, "intro")
        (decks_dir / "notes.txt").write_text("not a deck")

        decks = list_decks(decks_dir)

        assert [d.name for d in decks] == ["intro", "outro"]

    def test_empty_directory(self, site):
        assert list_decks(site / "presentations") == []

    def test_missing_directory(self, tmp_path):
        assert list_decks(tmp_path / "nope") == []

    def test_is_not_recursive_and_skips_directories(self, site, make_deck):
        decks_dir = site / "presentations"
        (decks_dir / "nested").mkdir()
        make_deck(decks_dir / "nested", "deep")
        (decks_dir / "folder.html").mkdir()

        assert list_decks(decks_dir) == []

    def test_custom_pattern(self, site, make_deck):
        decks_dir = site / "presentations"
        make_deck(decks_dir, "a")
        (decks_dir / "b.htm").write_text("<html></html>")

        assert [d.name for d in list_decks(decks_dir, "*.htm")] == ["b"]


class TestEnvInt:
    """Tests for integer environment overrides."""

    def test_default_when_unset(self, clean_environment):
        assert env_int("DECKPRINT_PORT", 8125) == 8125

    def test_override(self, monkeypatch):
        monkeypatch.setenv("DECKPRINT_PORT", "9000")
        assert env_int("DECKPRINT_PORT", 8125) == 9000

    def test_invalid_value(self, monkeypatch):
        monkeypatch.setenv("DECKPRINT_PORT", "eighty")
        with pytest.raises(ValueError, match="DECKPRINT_PORT"):
            env_int("DECKPRINT_PORT", 8125)
