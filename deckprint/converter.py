"""
Deck → PDF conversion with Playwright.

Each deck gets its own page in a shared Chromium instance. The page loads the
deck with the ``?print-pdf`` query flag, waits for the network to go idle and
for the deck's readiness flag (``window.revealLoaded``), then prints to PDF.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from playwright.async_api import Browser, Page, Request

from deckprint.config import (
    PAGE_FORMAT,
    PRINT_QUERY,
    READY_FLAG,
    NETWORK_IDLE_MAX_INFLIGHT,
    NETWORK_IDLE_MS,
    TIMEOUT_MS,
    VIEWPORT_HEIGHT,
    VIEWPORT_WIDTH,
)
from deckprint.decks import Deck

log = logging.getLogger(__name__)


class DeckExportError(Exception):
    """A single deck failed to export."""


class DeckNavigationError(DeckExportError):
    pass


class DeckExportTimeout(DeckExportError):
    pass


@dataclass
class PrintOptions:
    viewport: dict = field(
        default_factory=lambda: {"width": VIEWPORT_WIDTH, "height": VIEWPORT_HEIGHT}
    )
    page_format: str = PAGE_FORMAT
    print_background: bool = True
    query: str = PRINT_QUERY
    ready_flag: Optional[str] = READY_FLAG  # None skips the readiness wait
    wait_until: str = "networkidle2"  # load | domcontentloaded | networkidle | networkidle2
    timeout_ms: int = TIMEOUT_MS  # readiness wait and PDF export
    navigation_timeout_ms: int = 0  # 0 = no limit
    idle_ms: int = NETWORK_IDLE_MS
    idle_max_inflight: int = NETWORK_IDLE_MAX_INFLIGHT


def deck_url(base_url: str, deck: Deck, root: Path, query: str = PRINT_QUERY) -> str:
    """Build the URL the browser opens for *deck*."""
    url = f"{base_url.rstrip('/')}/{quote(deck.url_path(root))}"
    return f"{url}?{query}" if query else url


class NetworkIdleWatcher:
    """Counts a page's in-flight requests to detect "almost idle" network.

    Idle means at most *max_inflight* requests open for *idle_ms* without any
    new activity, so a deck holding one long-lived connection (EventSource,
    live reload) still settles. Attach before navigating.
    """

    def __init__(self, page: Page, max_inflight: int = NETWORK_IDLE_MAX_INFLIGHT,
                 idle_ms: int = NETWORK_IDLE_MS):
        self._page = page
        self._max_inflight = max_inflight
        self._idle_s = idle_ms / 1000
        self._inflight: set = set()
        self._changed = asyncio.Event()
        self._handlers = {
            "request": self._on_request,
            "requestfinished": self._on_done,
            "requestfailed": self._on_done,
        }
        for event, handler in self._handlers.items():
            page.on(event, handler)

    @property
    def inflight(self) -> int:
        return len(self._inflight)

    def _on_request(self, request: Request) -> None:
        self._inflight.add(request)
        self._changed.set()

    def _on_done(self, request: Request) -> None:
        self._inflight.discard(request)
        self._changed.set()

    async def wait(self) -> None:
        while True:
            self._changed.clear()
            if len(self._inflight) > self._max_inflight:
                await self._changed.wait()
                continue
            try:
                await asyncio.wait_for(self._changed.wait(), self._idle_s)
            except asyncio.TimeoutError:
                return

    def detach(self) -> None:
        for event, handler in self._handlers.items():
            self._page.remove_listener(event, handler)


async def _navigate(page: Page, url: str, options: PrintOptions):
    if options.wait_until != "networkidle2":
        return await page.goto(
            url, wait_until=options.wait_until, timeout=options.navigation_timeout_ms,
        )

    watcher = NetworkIdleWatcher(page, options.idle_max_inflight, options.idle_ms)
    try:
        response = await page.goto(url, wait_until="load", timeout=options.navigation_timeout_ms)
        try:
            await asyncio.wait_for(watcher.wait(), options.navigation_timeout_ms / 1000 or None)
        except asyncio.TimeoutError:
            raise DeckNavigationError(
                f"{url} still had {watcher.inflight} requests in flight after "
                f"{options.navigation_timeout_ms} ms"
            ) from None
        return response
    finally:
        watcher.detach()


def ready_expression(flag: str) -> str:
    """JS predicate that is truthy once the deck sets ``window[flag]``."""
    return f"() => Boolean(window[{json.dumps(flag)}])"


async def convert_deck(
    browser: Browser,
    deck: Deck,
    *,
    base_url: str,
    root: Path,
    output_dir: Path,
    options: Optional[PrintOptions] = None,
) -> Path:
    """Render one deck to ``<output_dir>/<deck>.pdf`` and return that path.

    Raises:
        DeckNavigationError: the deck URL did not load (no response or non-2xx).
        playwright.async_api.TimeoutError: the readiness flag was not set in time.
        DeckExportTimeout: printing the PDF took longer than the timeout.
    """
    options = options or PrintOptions()

    log.info("Create page for %s", deck.path)
    page = await browser.new_page(viewport=options.viewport)
    try:
        url = deck_url(base_url, deck, root, options.query)
        log.info("Route to %s", url)
        response = await _navigate(page, url, options)
        if response is None:
            raise DeckNavigationError(f"No response for {url}")
        if not response.ok:
            raise DeckNavigationError(f"{url} returned HTTP {response.status}")

        if options.ready_flag:
            log.info("Wait for %s on %s", options.ready_flag, deck.name)
            await page.wait_for_function(
                ready_expression(options.ready_flag),
                timeout=options.timeout_ms,
            )

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        pdf_path = deck.pdf_path(output_dir)

        try:
            await asyncio.wait_for(
                page.pdf(
                    path=str(pdf_path),
                    format=options.page_format,
                    print_background=options.print_background,
                ),
                timeout=options.timeout_ms / 1000 or None,
            )
        except asyncio.TimeoutError:
            raise DeckExportTimeout(
                f"PDF export of {deck.name} exceeded {options.timeout_ms} ms"
            ) from None

        log.info("Generated PDF %s", pdf_path)
        return pdf_path
    finally:
        await page.close()
