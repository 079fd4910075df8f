from pathlib import Path

import pytest

from a11y_checker.schema import ScanResult, ToolOptions, Violation, ViolationNode


def raw_violation(id="image-alt", impact="critical", nodes=1, **extra):
    v = {
        "id": id,
        "impact": impact,
        "description": f"{id} description",
        "help": f"{id} help",
        "helpUrl": f"https://dequeuniversity.com/rules/axe/4.9/{id}",
        "tags": ["cat.text-alternatives", "wcag2a", "wcag111"],
        "nodes": [
            {"html": f"<img src=\"{i}.png\">", "target": [f"img:nth-child({i + 1})"], "failureSummary": "Fix any of the following"}
            for i in range(nodes)
        ],
    }
    v.update(extra)
    return v


def raw_axe_result(violations=(), passes=3, incomplete=1, inapplicable=2):
    return {
        "violations": list(violations),
        "passes": [{"id": f"pass-{i}"} for i in range(passes)],
        "incomplete": [{"id": f"inc-{i}"} for i in range(incomplete)],
        "inapplicable": [{"id": f"na-{i}"} for i in range(inapplicable)],
    }


class FakePage:
    def __init__(self, state):
        self.state = state
        self.closed = False

    async def goto(self, url, wait_until, timeout):
        self.state.navigations.append((url, wait_until, timeout))
        if wait_until in self.state.failing_waits:
            raise TimeoutError(f"Timeout {timeout}ms exceeded waiting for {wait_until}")

    async def screenshot(self, path):
        Path(path).write_bytes(b"\x89PNG fake")
        self.state.screenshots.append(path)

    async def close(self):
        self.closed = True


class FakeSession:
    def __init__(self, state):
        self.state = state
        self.closed = False

    async def new_page(self):
        page = FakePage(self.state)
        self.state.pages.append(page)
        return page

    async def close(self):
        self.closed = True


class FakeBrowser:
    """Stands in for Playwright and axe-core; configure before scanning."""

    def __init__(self):
        self.sessions = []
        self.pages = []
        self.navigations = []
        self.screenshots = []
        self.analyze_calls = []
        self.failing_waits = set()
        self.axe_result = raw_axe_result()
        self.engine_error = None

    async def launch(self, settings=None):
        session = FakeSession(self)
        self.sessions.append(session)
        return session

    async def analyze(self, page, tags, settings=None):
        self.analyze_calls.append(list(tags))
        if self.engine_error:
            raise self.engine_error
        return self.axe_result


@pytest.fixture
def fake_browser(monkeypatch):
    fake = FakeBrowser()
    monkeypatch.setattr("a11y_checker.browser.launch", fake.launch)
    monkeypatch.setattr("a11y_checker.axe_bridge.analyze", fake.analyze)
    return fake


@pytest.fixture
def make_result():
    def _make(impacts_and_counts, url="https://example.com", passes=5, incomplete=1, inapplicable=7):
        violations = []
        for i, (impact, count) in enumerate(impacts_and_counts):
            violations.append(
                Violation(
                    id=f"rule-{i}",
                    impact=impact,
                    description=f"Rule {i} description",
                    help=f"Rule {i} help",
                    help_url=f"https://example.org/rules/{i}",
                    tags=("wcag2a", "wcag412", "best-practice"),
                    nodes=tuple(
                        ViolationNode(html=f"<div id=\"n{j}\"></div>", target=(f"#n{j}",)) for j in range(count)
                    ),
                )
            )
        return ScanResult(
            url=url,
            timestamp="2024-05-01T10:15:30.123Z",
            violations=tuple(violations),
            passes=passes,
            incomplete=incomplete,
            inapplicable=inapplicable,
            tool_options=ToolOptions(url=url),
        )

    return _make
