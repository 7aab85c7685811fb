from __future__ import annotations

import sys
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def _isolated_policy_file(tmp_path, monkeypatch):
    # Never pick up a developer's config/cinemamode.json during tests.
    from cinema.core import policy

    monkeypatch.setenv("CINEMA_MODE_CONFIG_PATH", str(tmp_path / "cinemamode.json"))
    policy.clear_policy_cache()
    yield
    policy.clear_policy_cache()
