"""Exceptions raised while scanning a page or writing its reports."""
from __future__ import annotations

from typing import Optional


class ScanError(Exception):
    """Base class for failures that abort a scan or a report write."""


class NavigationError(ScanError):
    """Neither the network-idle load nor the DOM-content-loaded fallback succeeded."""

    def __init__(self, url: str, cause: Optional[BaseException] = None):
        self.url = url
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Could not load {url}{detail}")


class ScanEngineError(ScanError):
    """axe-core could not be run against the page, or returned an unusable result."""

    def __init__(self, url: str, cause: Optional[BaseException] = None):
        self.url = url
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Accessibility rules could not be evaluated for {url}{detail}")


class FileWriteError(ScanError):
    def __init__(self, path, cause: Optional[BaseException] = None):
        self.path = str(path)
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Failed writing {self.path}{detail}")
