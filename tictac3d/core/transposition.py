# tictac3d/core/transposition.py
from typing import List, Optional
from .constants import HASH_MULTIPLIER, DEFAULT_TABLE_SIZE, DEFAULT_CACHE_CAPACITY
from tictac3d.schemas.move_schema import CacheStats

# Chain terminator in the bucket and 'next' lists
EMPTY = -1


class CacheFullError(RuntimeError):
    """Raised when a solve needs more entries than the table was provisioned for."""


class TranspositionTable:
    """
    Exact-score cache keyed by the (mover, opponent) bitboards.

    Entries live in an arena of parallel lists addressed by insertion order;
    each of the 'table_size' buckets holds the index of the newest entry in
    its chain. Entries are never evicted, so the table must be provisioned
    with enough capacity for the whole run.
    """

    def __init__(self, table_size: int = DEFAULT_TABLE_SIZE, capacity: int = DEFAULT_CACHE_CAPACITY):
        if table_size <= 0:
            raise ValueError(f"table_size must be positive, got {table_size}")
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.table_size = table_size
        self.capacity = capacity
        self.reset()

    def reset(self):
        self._buckets: List[int] = [EMPTY] * self.table_size
        self._next: List[int] = []
        self._xs: List[int] = []
        self._os: List[int] = []
        self._values: List[int] = []
        self.hits = 0
        self.misses = 0

    def index(self, x: int, o: int) -> int:
        return ((HASH_MULTIPLIER * x) ^ o) % self.table_size

    def get(self, x: int, o: int) -> Optional[int]:
        entry = self._buckets[self.index(x, o)]
        # Both fields must match; a partial match is just another collision
        while entry != EMPTY and not (self._xs[entry] == x and self._os[entry] == o):
            entry = self._next[entry]
        if entry == EMPTY:
            self.misses += 1
            return None
        self.hits += 1
        return self._values[entry]

    def put(self, x: int, o: int, score: int):
        """Stores a score. Callers look the key up first; keys are never stored twice."""
        entry = len(self._values)
        if entry >= self.capacity:
            raise CacheFullError(
                f"Transposition table full ({self.capacity} entries); raise cache_capacity"
            )
        bucket = self.index(x, o)
        self._xs.append(x)
        self._os.append(o)
        self._values.append(score)
        self._next.append(self._buckets[bucket])
        self._buckets[bucket] = entry

    def __len__(self) -> int:
        return len(self._values)

    def chain_length(self, bucket: int) -> int:
        length = 0
        entry = self._buckets[bucket]
        while entry != EMPTY:
            length += 1
            entry = self._next[entry]
        return length

    def stats(self) -> CacheStats:
        """Population and bucket-occupancy histogram (10 means 10 or more)."""
        sizes = {n: 0 for n in range(11)}
        for bucket in range(self.table_size):
            sizes[min(self.chain_length(bucket), 10)] += 1
        return CacheStats(
            capacity=self.capacity,
            population=len(self),
            buckets=self.table_size,
            hits=self.hits,
            misses=self.misses,
            bucket_sizes=sizes,
            load_factor=len(self) / self.table_size,
        )
