# conftest.py
import numpy as np
import pytest

from pystagger.kernels import ExecutionContext


@pytest.fixture(params=[ExecutionContext(jit=False),
                        ExecutionContext(parallel=False),
                        ExecutionContext(parallel=True)],
                ids=["python", "serial", "parallel"])
def context(request):
    """Every kernel-launching test runs on each execution variant."""
    return request.param


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
