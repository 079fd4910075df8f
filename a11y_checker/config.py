"""Runtime settings.

Values come from the environment (a local ``.env`` is loaded first), and an
optional YAML file may override any of them::

    reports_dir: build/a11y
    browser: firefox
    wcag: AA,AAA
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .schema import DEFAULT_TIMEOUT_MS

AXE_CDN = "https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.9.1/axe.min.js"

VIEWPORT = {"width": 1920, "height": 1080}
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

_ENV_KEYS = {
    "reports_dir": "A11Y_REPORTS_DIR",
    "axe_script_url": "A11Y_AXE_SCRIPT_URL",
    "axe_script_path": "A11Y_AXE_SCRIPT_PATH",
    "browser": "A11Y_BROWSER",
    "headless": "A11Y_HEADLESS",
    "timeout": "A11Y_TIMEOUT_MS",
    "wcag": "A11Y_WCAG",
}


class Settings(BaseModel):
    reports_dir: str = "reports"
    axe_script_url: str = AXE_CDN
    axe_script_path: Optional[str] = None  # local axe.min.js, preferred over the URL
    browser: str = Field("chromium", pattern="^(chromium|firefox|webkit)$")
    headless: bool = True
    timeout: int = Field(DEFAULT_TIMEOUT_MS, gt=0)
    wcag: str = "AA"


def load_settings(config_file: Optional[Union[str, Path]] = None) -> Settings:
    load_dotenv()
    values = {}
    for field, env_key in _ENV_KEYS.items():
        raw = os.getenv(env_key)
        if raw is not None and raw != "":
            values[field] = raw
    if config_file:
        with open(config_file, encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {config_file} must contain a mapping")
        values.update({k: v for k, v in data.items() if k in Settings.model_fields})
    return Settings(**values)


__all__ = ["Settings", "load_settings", "AXE_CDN", "VIEWPORT", "USER_AGENT"]
