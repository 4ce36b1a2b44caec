import time
from abc import ABC, abstractmethod
from typing import Iterator, Optional
from gridmaze.core.grid import Grid

def resolve_seed(seed: Optional[int]) -> int:
    """
    Seed policy of the user-facing entry points: None or a value that is not
    positive is replaced by the current time in ns.
    """
    if seed is None or seed <= 0:
        return time.time_ns()
    return seed

class Generator(ABC):
    def __init__(self, grid: Grid, seed: int = None):
        self.grid = grid
        # Any explicit seed is used as given, 0 and negatives included
        self.seed = time.time_ns() if seed is None else seed
        self.step_count = 0

    @abstractmethod
    def run(self) -> Iterator[str]:
        """
        Yields status strings or progress updates.
        The actual grid modifications happen in-place on self.grid.
        """
        pass

    def run_all(self):
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass
