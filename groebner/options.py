from dataclasses import dataclass
from typing import Any, Optional

ALGORITHMS = ("buchberger", "f4")
SELECTIONS = ("degree", "fifo")

@dataclass
class EngineOptions:
    algorithm         : str = "buchberger"
    product_criterion : bool = True
    chain_criterion   : bool = True
    selection         : str = "degree"
    # Anything with is_set(), e.g. threading.Event; polled between pairs.
    cancel            : Optional[Any] = None
    max_pairs         : Optional[int] = None

    def __post_init__(self):
        if self.algorithm not in ALGORITHMS:
            raise ValueError(f"unknown algorithm {self.algorithm!r}, expected one of {ALGORITHMS}")
        if self.selection not in SELECTIONS:
            raise ValueError(f"unknown pair selection {self.selection!r}, expected one of {SELECTIONS}")
        if self.max_pairs is not None and self.max_pairs < 0:
            raise ValueError(f"max_pairs must be non-negative, got {self.max_pairs}")
        if self.cancel is not None and not callable(getattr(self.cancel, "is_set", None)):
            raise TypeError(f"cancel must provide is_set(), got {self.cancel!r}")

    @property
    def cancelled(self):
        return self.cancel is not None and self.cancel.is_set()
