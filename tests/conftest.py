"""
Pytest configuration and fixtures.
"""
import pytest
from pathlib import Path


DECK_TEMPLATE = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>{name}</title></head>
<body>
<div id="content">{name}</div>
<script>
  if (location.search.indexOf("print-pdf") !== -1) {{
    document.getElementById("content").textContent = "PRINT MODE {name}";
    {ready}
  }}
</script>
</body>
</html>
"""


def write_deck(directory: Path, name: str, ready: bool = True) -> Path:
    """Write a minimal deck.

    The deck sets window.revealLoaded only when loaded with ?print-pdf, and
    never when ready=False.
    """
    script = "setTimeout(function () { window.revealLoaded = true; }, 100);" if ready else ""
    path = directory / f"{name}.html"
    path.write_text(DECK_TEMPLATE.format(name=name, ready=script), encoding="utf-8")
    return path


@pytest.fixture
def site(tmp_path):
    """A served root with an empty presentations/ directory."""
    (tmp_path / "presentations").mkdir()
    return tmp_path


@pytest.fixture
def clean_environment(monkeypatch):
    """Provide a clean environment for tests."""
    for var in [
        "DECKPRINT_PORT",
        "DECKPRINT_HOST",
        "DECKPRINT_SERVE_ROOT",
        "DECKPRINT_DECKS_DIR",
        "DECKPRINT_PDF_DIR",
        "DECKPRINT_TIMEOUT_MS",
    ]:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def make_deck():
    """Factory fixture: make_deck(directory, name, ready=True) -> Path."""
    return write_deck
