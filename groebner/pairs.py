from dataclasses import dataclass, field
import heapq

from .monomials import Monomial
from .reduction import pair_key

@dataclass(frozen=True)
class CriticalPair:
    i   : int
    j   : int
    lcm : Monomial = field(compare=False)

    def __post_init__(self):
        if self.i == self.j:
            raise ValueError(f"a critical pair needs two distinct indices, got {self.i}")
        if self.i > self.j:
            i, j = self.j, self.i
            object.__setattr__(self, "i", i)
            object.__setattr__(self, "j", j)

    @property
    def key(self):
        return (self.i, self.j)

    @property
    def degree(self):
        return self.lcm.degree

class PairQueue:
    """Worklist of pending critical pairs.

    With ``selection="degree"`` the pair with the smallest lcm (by total
    degree, then by the term order) comes first; ``"fifo"`` keeps
    insertion order. Ties fall back to the indices so runs are
    reproducible.
    """

    def __init__(self, order, selection="degree"):
        self.order = order
        self.selection = selection
        self.heap = []
        self.pending = set()
        self.counter = 0

    def push(self, pair):
        if pair.key in self.pending:
            return False
        if self.selection == "degree":
            rank = (pair.degree, self.order.key(pair.lcm), pair.j, pair.i)
        else:
            rank = (self.counter,)
        self.counter += 1
        heapq.heappush(self.heap, (rank, self.counter, pair))
        self.pending.add(pair.key)
        return True

    def pop(self):
        _, _, pair = heapq.heappop(self.heap)
        self.pending.discard(pair.key)
        return pair

    def __contains__(self, key):
        return pair_key(*key) in self.pending

    def __len__(self):
        return len(self.heap)

    def __bool__(self):
        return bool(self.heap)
