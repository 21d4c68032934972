"""Test configuration.

Pytest sometimes runs with the current working directory set to ``tests/``.
Make sure the project root (and thus the ``raycaster`` and ``lib`` packages)
is importable, and keep pygame off any real display.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from raycaster.defs import RaycasterConfig  # noqa: E402
from raycaster.tables import TrigTables  # noqa: E402
from raycaster.world import GridWorld  # noqa: E402

OPEN_ROWS = ["1" * 16] + ["1" + "0" * 14 + "1" for _ in range(14)] + ["1" * 16]


@pytest.fixture
def config() -> RaycasterConfig:
    return RaycasterConfig()


@pytest.fixture(scope="session")
def tables() -> TrigTables:
    return TrigTables.build(1920, 64)


@pytest.fixture
def open_world() -> GridWorld:
    """16x16 map: wall border around a fully open 14x14 interior."""
    return GridWorld.from_rows(OPEN_ROWS)


@pytest.fixture
def default_world() -> GridWorld:
    return GridWorld.default()
