# ruff: noqa: E402

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import workon.log as workon_log


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(workon_log, "_configured_level", None)
    monkeypatch.setattr(workon_log, "_no_color", None)
    monkeypatch.setenv("WORKON_NO_COLOR", "1")
    monkeypatch.delenv("WORKON_LOG_LEVEL", raising=False)
