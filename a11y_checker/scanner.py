"""Scanner: owns the browser session, loads a page and runs axe-core against it."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from . import axe_bridge, browser
from .browser import DOM_CONTENT_LOADED, NETWORK_IDLE, BrowserSession, PageHandle
from .config import Settings
from .errors import FileWriteError, NavigationError, ScanEngineError
from .schema import ScanResult, ToolOptions, Violation, ViolationNode

logger = logging.getLogger(__name__)

Launcher = Callable[[Settings], Awaitable[BrowserSession]]
Engine = Callable[[PageHandle, List[str], Settings], Awaitable[Dict[str, Any]]]


def utc_timestamp() -> str:
    """Current time as ISO-8601 with millisecond precision, e.g. 2024-05-01T10:00:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize_target(target: Any) -> tuple:
    """Coerce an axe ``target`` into a tuple of selector strings.

    A plain string becomes a single segment. Nested lists (shadow DOM paths)
    are joined with ``>>>`` into one segment. Anything else is rejected.
    """
    if isinstance(target, str):
        return (target,)
    if not isinstance(target, Sequence):
        raise ValueError(f"Unsupported target shape: {target!r}")
    segments = []
    for part in target:
        if isinstance(part, str):
            segments.append(part)
        elif isinstance(part, Sequence) and all(isinstance(p, str) for p in part):
            segments.append(" >>> ".join(part))
        else:
            raise ValueError(f"Unsupported target segment: {part!r}")
    return tuple(segments)


def normalize_violation(raw: Dict[str, Any]) -> Violation:
    nodes = [
        ViolationNode(
            html=n.get("html") or "",
            target=normalize_target(n.get("target", ())),
            failure_summary=n.get("failureSummary"),
        )
        for n in raw.get("nodes", [])
    ]
    return Violation(
        id=raw["id"],
        impact=raw.get("impact"),
        description=raw.get("description", ""),
        help=raw.get("help", ""),
        help_url=raw.get("helpUrl", ""),
        tags=tuple(raw.get("tags", [])),
        nodes=tuple(nodes),
    )


def normalize_violations(raw_violations: Sequence[Dict[str, Any]]) -> List[Violation]:
    return [normalize_violation(v) for v in raw_violations]


def screenshot_path_for(output_path: str) -> str:
    return str(Path(output_path).with_suffix(".png"))


class AccessibilityScanner:
    """Scans one URL per ``scan`` call; the browser session is reused across calls.

    Always call ``close`` (or use ``async with``) to release the browser.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        launcher: Optional[Launcher] = None,
        engine: Optional[Engine] = None,
    ):
        self.settings = settings or Settings()
        self._launcher = launcher
        self._engine = engine
        self._session: Optional[BrowserSession] = None
        self._page: Optional[PageHandle] = None

    async def __aenter__(self) -> "AccessibilityScanner":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    @property
    def is_open(self) -> bool:
        return self._session is not None

    async def start(self) -> BrowserSession:
        if self._session is None:
            launcher = self._launcher or browser.launch
            self._session = await launcher(self.settings)
        return self._session

    async def _open_page(self) -> PageHandle:
        session = await self.start()
        # A fresh isolated context per scan; drop the previous one first.
        if self._page is not None:
            await self._page.close()
            self._page = None
        self._page = await session.new_page()
        return self._page

    async def _navigate(self, page: PageHandle, url: str, timeout: int) -> None:
        try:
            await page.goto(url, wait_until=NETWORK_IDLE, timeout=timeout)
            return
        except Exception as exc:
            logger.warning("Network-idle load of %s failed (%s); retrying with DOM content loaded", url, exc)
        try:
            await page.goto(url, wait_until=DOM_CONTENT_LOADED, timeout=timeout)
        except Exception as exc:
            raise NavigationError(url, exc) from exc

    async def _evaluate(self, page: PageHandle, options: ToolOptions) -> Dict[str, Any]:
        engine = self._engine or axe_bridge.analyze
        try:
            return await engine(page, options.rule_tags, self.settings)
        except Exception as exc:
            raise ScanEngineError(options.url, exc) from exc

    async def _screenshot(self, page: PageHandle, output_path: str) -> str:
        path = screenshot_path_for(output_path)
        try:
            Path(path).parent.mkdir(parents=True, exist_ok=True)
            await page.screenshot(path)
        except Exception as exc:
            raise FileWriteError(path, exc) from exc
        logger.info("Screenshot saved to %s", path)
        return path

    async def scan(self, options: ToolOptions) -> ScanResult:
        logger.info("Scanning %s (WCAG %s)", options.url, ",".join(level.value for level in options.wcag_level))
        try:
            page = await self._open_page()
            await self._navigate(page, options.url, options.timeout)
            raw = await self._evaluate(page, options)
            if options.screenshot and options.output_path:
                await self._screenshot(page, options.output_path)
            try:
                violations = normalize_violations(raw.get("violations", []))
                passes = len(raw.get("passes", []))
                incomplete = len(raw.get("incomplete", []))
                inapplicable = len(raw.get("inapplicable", []))
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                raise ScanEngineError(options.url, exc) from exc
            return ScanResult(
                url=options.url,
                timestamp=utc_timestamp(),
                violations=tuple(violations),
                passes=passes,
                incomplete=incomplete,
                inapplicable=inapplicable,
                tool_options=options,
            )
        except Exception:
            logger.exception("Error during scan of %s", options.url)
            raise

    async def close(self) -> None:
        page, self._page = self._page, None
        session, self._session = self._session, None
        try:
            if page is not None:
                await page.close()
        finally:
            if session is not None:
                await session.close()
