from typing import Iterable, List

import pytest


class SequenceRng:
    """Deterministic random source that replays a fixed list of floats."""

    def __init__(self, values: Iterable[float]):
        self.values: List[float] = list(values)
        self.calls = 0

    def random(self) -> float:
        v = self.values[self.calls % len(self.values)]
        self.calls += 1
        return v


@pytest.fixture
def seq_rng():
    return SequenceRng
