"""
Pytest configuration: default runs most tests; use --run-slow to include slow tests.
"""

from pathlib import Path

import pytest

from mjprompt.core.store import PromptStore


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Run slow tests (real system clipboard). Default: skip them.",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if config.getoption("--run-slow", False):
        return
    skip_slow = pytest.mark.skip(reason="Slow test; run with --run-slow to include")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture(autouse=True)
def _isolated_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep every test away from the real per-user prompt document."""
    data_dir = tmp_path / "data"
    monkeypatch.setenv("MJPROMPT_DATA_DIR", str(data_dir))
    return data_dir


@pytest.fixture
def store(tmp_path: Path) -> PromptStore:
    return PromptStore(tmp_path / "midjourney_prompt" / "promt.yaml")
