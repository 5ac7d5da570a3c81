"""
Batch export pipeline: serve → open → wait → export, for every deck at once.

One static server and one browser are shared by all jobs for the lifetime of
a run. Every job runs concurrently and its outcome is captured as a
JobResult, so one deck failing never cancels the others.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import AsyncIterator, Optional

from playwright.async_api import Browser, async_playwright

from deckprint.config import DECK_PATTERN, DECKS_DIR, HOST, PDF_DIR, PORT, SERVE_ROOT
from deckprint.converter import PrintOptions, convert_deck
from deckprint.decks import Deck, list_decks
from deckprint.server import StaticServer, serve_static, server_url

log = logging.getLogger(__name__)


@dataclass
class RunConfig:
    serve_root: Path = SERVE_ROOT
    decks_dir: Path = DECKS_DIR
    pattern: str = DECK_PATTERN
    output_dir: Path = PDF_DIR
    host: str = HOST
    port: int = PORT
    headless: bool = True
    options: PrintOptions = field(default_factory=PrintOptions)


@dataclass
class RunContext:
    """Resources shared by every job of a run."""

    server: StaticServer
    browser: Browser
    base_url: str
    serve_root: Path


@dataclass
class JobResult:
    deck: Deck
    pdf_path: Optional[Path] = None
    error: Optional[BaseException] = None
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None and self.pdf_path is not None


@contextlib.asynccontextmanager
async def launch_browser(headless: bool = True) -> AsyncIterator[Browser]:
    """Start Playwright and one Chromium instance; always close both."""
    log.info("Launch Chromium (headless=%s)", headless)
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=headless)
        try:
            yield browser
        finally:
            await browser.close()
            log.info("Browser closed")


@contextlib.asynccontextmanager
async def open_run(config: RunConfig) -> AsyncIterator[RunContext]:
    """Start the server, then the browser; tear both down on every exit path."""
    with serve_static(config.serve_root, config.port, config.host) as server:
        async with launch_browser(config.headless) as browser:
            yield RunContext(
                server=server,
                browser=browser,
                base_url=server_url(server, config.host),
                serve_root=Path(config.serve_root),
            )


async def _run_job(ctx: RunContext, deck: Deck, config: RunConfig) -> JobResult:
    start = time.monotonic()
    try:
        pdf_path = await convert_deck(
            ctx.browser,
            deck,
            base_url=ctx.base_url,
            root=ctx.serve_root,
            output_dir=config.output_dir,
            options=config.options,
        )
    except Exception as e:
        log.error("Failed to export %s: %s", deck.name, e)
        return JobResult(deck=deck, error=e, elapsed=time.monotonic() - start)
    return JobResult(deck=deck, pdf_path=pdf_path, elapsed=time.monotonic() - start)


async def export_all(
    ctx: RunContext, decks: list[Deck], config: RunConfig,
) -> list[JobResult]:
    """Export every deck concurrently and wait for all of them to settle."""
    if not decks:
        return []
    return list(await asyncio.gather(*(_run_job(ctx, d, config) for d in decks)))


async def generate_pdfs(config: Optional[RunConfig] = None) -> list[JobResult]:
    """Run the whole pipeline once and return one result per deck."""
    config = config or RunConfig()

    async with open_run(config) as ctx:
        decks = list_decks(config.decks_dir, config.pattern)
        return await export_all(ctx, decks, config)


def summarize(results: list[JobResult]) -> int:
    """Log the outcome of a run and return its exit status (0 or 1)."""
    failed = [r for r in results if not r.ok]
    for r in results:
        if r.ok:
            log.debug("%s → %s (%.1fs)", r.deck.name, r.pdf_path, r.elapsed)
    for r in failed:
        log.error("  %s: %s", r.deck.name, r.error)

    log.info("Generated %d/%d PDFs", len(results) - len(failed), len(results))
    return 1 if failed else 0


def run(config: Optional[RunConfig] = None) -> int:
    """Synchronous entry point: run the pipeline and return the exit status."""
    return summarize(asyncio.run(generate_pdfs(config)))
