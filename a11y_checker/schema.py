from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ViolationImpact(str, Enum):
    MINOR = "minor"
    MODERATE = "moderate"
    SERIOUS = "serious"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _IMPACT_ORDER.index(self)

    def __lt__(self, other):
        if not isinstance(other, ViolationImpact):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, ViolationImpact):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, ViolationImpact):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, ViolationImpact):
            return NotImplemented
        return self.rank >= other.rank


_IMPACT_ORDER = [
    ViolationImpact.MINOR,
    ViolationImpact.MODERATE,
    ViolationImpact.SERIOUS,
    ViolationImpact.CRITICAL,
]


class WCAGLevel(str, Enum):
    A = "A"
    AA = "AA"
    AAA = "AAA"

    @property
    def tag(self) -> str:
        """axe-core rule tag selecting this level, e.g. ``wcag2aa``."""
        return f"wcag2{self.value.lower()}"


def parse_wcag_levels(raw: Union[None, str, WCAGLevel, Iterable]) -> List[WCAGLevel]:
    """Parse ``"a, aa,bogus"`` or a sequence of levels into known levels.

    Unknown tokens are dropped rather than rejected; nothing left means AA.
    """
    if raw is None:
        items: Iterable = []
    elif isinstance(raw, WCAGLevel):
        items = [raw.value]
    elif isinstance(raw, str):
        items = raw.split(",")
    else:
        items = [item.value if isinstance(item, WCAGLevel) else str(item) for item in raw]
    levels: List[WCAGLevel] = []
    for token in items:
        token = token.strip().upper()
        if token in WCAGLevel.__members__ and WCAGLevel(token) not in levels:
            levels.append(WCAGLevel(token))
    return levels or [WCAGLevel.AA]


DEFAULT_TIMEOUT_MS = 30000


class ToolOptions(BaseModel):
    """Options for a single scan. Built once per invocation, never mutated."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(min_length=1)
    timeout: int = Field(DEFAULT_TIMEOUT_MS, gt=0)  # milliseconds
    wcag_level: Tuple[WCAGLevel, ...] = (WCAGLevel.AA,)
    output_path: Optional[str] = None
    verbose: bool = False
    screenshot: bool = False

    @field_validator("wcag_level", mode="before")
    @classmethod
    def _filter_levels(cls, value):
        return tuple(parse_wcag_levels(value))

    @property
    def rule_tags(self) -> List[str]:
        return [level.tag for level in self.wcag_level]


class ViolationNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    html: str
    target: Tuple[str, ...]  # CSS selector path segments
    failure_summary: Optional[str] = None


class Violation(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    impact: Optional[str]  # kept verbatim; may be outside ViolationImpact
    description: str
    help: str
    help_url: str
    tags: Tuple[str, ...] = ()
    nodes: Tuple[ViolationNode, ...] = Field(min_length=1)

    @property
    def severity(self) -> Optional[ViolationImpact]:
        try:
            return ViolationImpact(self.impact)
        except ValueError:
            return None

    @property
    def wcag_tags(self) -> List[str]:
        return [t for t in self.tags if t.startswith("wcag")]


class ScanResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    timestamp: str  # ISO-8601, taken when the result is assembled
    violations: Tuple[Violation, ...] = ()
    passes: int = Field(0, ge=0)
    incomplete: int = Field(0, ge=0)
    inapplicable: int = Field(0, ge=0)
    tool_options: ToolOptions


class ScanSummary(BaseModel):
    """Severity totals derived from a ScanResult, counted in affected elements."""

    model_config = ConfigDict(frozen=True)

    total_violations: int = 0
    critical: int = 0
    serious: int = 0
    moderate: int = 0
    minor: int = 0
    url: str
    timestamp: str
