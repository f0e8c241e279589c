import os
import sys

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from rsquare.field import FR
from rsquare.prover import Prover
from rsquare.square import Square
from rsquare.srs import SRS


# ── 테스트 상수 ──
SMALL_GRID = [[1, 2], [3, 4]]
SMALL_SCALE = 2
SRS_SEED = 42

EXAMPLE_GRID = [[4 * r + c for c in range(4)] for r in range(4)]
EXAMPLE_SCALE = 4


@pytest.fixture(scope="session")
def srs_small():
    """차수 8 SRS (bn128, seed=42)."""
    return SRS.generate(max_degree=8, seed=SRS_SEED)


@pytest.fixture(scope="session")
def tau():
    """SRS_SEED에서 유도되는 τ (테스트 검증용)."""
    import hashlib
    h = hashlib.sha256(str(SRS_SEED).encode()).digest()
    return FR(int.from_bytes(h, "big"))


@pytest.fixture
def example_square():
    """4 × 4 격자, scale 4 → 16 × 16으로 확장된 Square."""
    square = Square.from_shares(EXAMPLE_GRID, EXAMPLE_SCALE)
    square.extend()
    return square


@pytest.fixture(scope="session")
def small_prover():
    """2 × 2 격자, scale 2, seed=42 Prover."""
    return Prover(SMALL_GRID, SMALL_SCALE, seed=SRS_SEED)


@pytest.fixture(scope="session")
def example_prover():
    """4 × 4 격자 (0..15), scale 4, seed=42 Prover."""
    return Prover(EXAMPLE_GRID, EXAMPLE_SCALE, seed=SRS_SEED)
