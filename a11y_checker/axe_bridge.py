"""Bridge for running axe-core inside a loaded Playwright page.

The API is intentionally small: ``analyze`` injects axe-core into the page,
runs it restricted to the given rule tags and returns the raw axe result
(violations, passes, incomplete, inapplicable) as a dict.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .config import Settings

logger = logging.getLogger(__name__)

RUN_AXE = """
async (tags) => {
  if (!window.axe || !window.axe.run) {
    throw new Error('axe-core did not load');
  }
  const options = tags.length ? { runOnly: { type: 'tag', values: tags } } : {};
  return await window.axe.run(document, options);
}
"""


async def inject(page: Any, settings: Settings) -> None:
    if settings.axe_script_path:
        await page.add_script_tag(path=settings.axe_script_path)
    else:
        await page.add_script_tag(url=settings.axe_script_url)


async def analyze(page: Any, tags: List[str], settings: Optional[Settings] = None) -> Dict[str, Any]:
    settings = settings or Settings()
    # PlaywrightPage wraps the raw page; accept either.
    raw_page = getattr(page, "page", page)
    await inject(raw_page, settings)
    logger.debug("Running axe-core with tags %s", tags)
    result = await raw_page.evaluate(RUN_AXE, tags)
    if not isinstance(result, dict):
        raise TypeError(f"Unexpected axe result type: {type(result).__name__}")
    return result
