import importlib
import random

import pytest


def import_required(module_name: str):
    """
    Import a project module with a clearer failure message than ModuleNotFoundError.
    """
    try:
        return importlib.import_module(module_name)
    except ModuleNotFoundError as e:
        pytest.fail(
            f"Required module '{module_name}.py' not found. "
            f"Original error: {e}"
        )


@pytest.fixture
def maze_module():
    return import_required("maze")


@pytest.fixture
def pathfinding_module():
    return import_required("pathfinding")


@pytest.fixture
def main_module():
    return import_required("main")


def fixed_size(size: int):
    """Dimension drawer that always yields size, for pinning maze dimensions."""

    def _draw(rng: random.Random) -> int:
        return size

    return _draw


@pytest.fixture
def make_engine(main_module):
    def _make(size: int, seed: int = 0):
        return main_module.GameEngine(seed=seed, dimensions=fixed_size(size))

    return _make


class FakeCoinRng:
    """
    Stands in for random.Random where a test needs exact coin and range draws.
    Any other choice is delegated to a seeded random.Random.
    """

    def __init__(self, lucky: bool, value: int, seed: int = 0):
        self.lucky = lucky
        self.value = value
        self.randint_calls: list[tuple[int, int]] = []
        self._rng = random.Random(seed)

    def choice(self, seq):
        if tuple(seq) == (True, False):
            return self.lucky
        return self._rng.choice(seq)

    def randint(self, a: int, b: int) -> int:
        self.randint_calls.append((a, b))
        return self.value


@pytest.fixture
def fake_coin_rng():
    return FakeCoinRng
