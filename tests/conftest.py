from __future__ import annotations

import random

import pytest

from primeform.primality import PrimalityEngine
from primeform.runtime import reset as _rt_reset


@pytest.fixture
def engine():
    """Default-strength engine with a fixed seed, so a run is repeatable."""
    return PrimalityEngine(rounds=20, rng=random.Random(20240101))


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Point PRIMEFORM_HOME at an empty temp folder and start from a clean runtime."""
    ws = tmp_path / "ws"
    monkeypatch.setenv("PRIMEFORM_HOME", str(ws))
    _rt_reset()
    yield ws
    _rt_reset()
