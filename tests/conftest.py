import random

import pytest

from kzgcommit.pipeline import ProvingPipeline
from kzgcommit.srs import ParamsKZG


SEED_A = 1234
SEED_B = 5678


@pytest.fixture(scope="session")
def params_k3():
    """k=3 (n=8) 파라미터, 빠른 단위 테스트용."""
    return ParamsKZG.setup(3, rng=random.Random(SEED_A))


@pytest.fixture(scope="session")
def params_k3_other():
    """params_k3와 독립된 설정."""
    return ParamsKZG.setup(3, rng=random.Random(SEED_B))


@pytest.fixture(scope="session")
def params_k5():
    """k=5 (n=32) 파라미터, 데모와 같은 크기."""
    return ParamsKZG.setup(5, rng=random.Random(SEED_A))


@pytest.fixture(scope="session")
def pipeline_k3(params_k3):
    return ProvingPipeline(params_k3)


@pytest.fixture
def rng():
    return random.Random(7)
