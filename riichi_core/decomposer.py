"""Per-suit-block group enumeration.

A block is the count vector of one suit (9 ranks) or of the honors (7 kinds).
Blocks are searched independently and memoised by a packed base-5 key of the
residual counts; the shanten engine combines the per-block results.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from itertools import product

import structlog

logger = structlog.get_logger()

# (melds, partial melds, holds a pair-shaped partial)
Summary = tuple[int, int, int]
# ("triplet" | "sequence" | "pair", rank offset inside the block)
Arrangement = tuple[tuple[str, int], ...]


def pack(block: Sequence[int]) -> int:
    key = 0
    for count in reversed(block):
        key = key * 5 + count
    return key


def _prune(options: set[Summary]) -> frozenset[Summary]:
    kept = []
    for m, t, p in sorted(options, reverse=True):
        if any(km >= m and kt >= t and kp >= p for km, kt, kp in kept):
            continue
        kept.append((m, t, p))
    return frozenset(kept)


class BlockDecomposer:
    def __init__(self) -> None:
        self._summaries: dict[tuple[bool, int], frozenset[Summary]] = {}
        self._arrangements: dict[tuple[bool, bool, int], tuple[Arrangement, ...]] = {}

    def summaries(self, block: Sequence[int], honors: bool) -> frozenset[Summary]:
        key = (honors, pack(block))
        hit = self._summaries.get(key)
        if hit is not None:
            return hit
        result = self._search_summaries(list(block), honors)
        self._summaries[key] = result
        return result

    def _search_summaries(self, counts: list[int], honors: bool) -> frozenset[Summary]:
        first = next((i for i, c in enumerate(counts) if c > 0), -1)
        if first == -1:
            return frozenset({(0, 0, 0)})

        options: set[Summary] = set()

        def take(delta: dict[int, int], dm: int, dt: int, dp: int) -> None:
            for offset, n in delta.items():
                counts[first + offset] -= n
            for m, t, p in self.summaries(counts, honors):
                options.add((m + dm, t + dt, max(p, dp)))
            for offset, n in delta.items():
                counts[first + offset] += n

        runs = not honors
        if counts[first] >= 3:
            take({0: 3}, 1, 0, 0)
        if runs and first <= 6 and counts[first + 1] and counts[first + 2]:
            take({0: 1, 1: 1, 2: 1}, 1, 0, 0)
        if counts[first] >= 2:
            take({0: 2}, 0, 1, 1)
        if runs and first <= 7 and counts[first + 1]:
            take({0: 1, 1: 1}, 0, 1, 0)
        if runs and first <= 6 and counts[first + 2]:
            take({0: 1, 2: 1}, 0, 1, 0)
        take({0: 1}, 0, 0, 0)

        return _prune(options)

    def arrangements(self, block: Sequence[int], honors: bool, with_pair: bool) -> tuple[Arrangement, ...]:
        """Every exact partition of ``block`` into melds, plus one pair when ``with_pair``."""
        key = (honors, with_pair, pack(block))
        hit = self._arrangements.get(key)
        if hit is not None:
            return hit
        result = tuple(sorted(self._search_arrangements(list(block), honors, with_pair)))
        self._arrangements[key] = result
        return result

    def _search_arrangements(self, counts: list[int], honors: bool, with_pair: bool) -> set[Arrangement]:
        first = next((i for i, c in enumerate(counts) if c > 0), -1)
        if first == -1:
            return set() if with_pair else {()}

        found: set[Arrangement] = set()

        def take(delta: dict[int, int], group: tuple[str, int], pair_left: bool) -> None:
            for offset, n in delta.items():
                counts[first + offset] -= n
            for rest in self.arrangements(counts, honors, pair_left):
                found.add(tuple(sorted((group, *rest))))
            for offset, n in delta.items():
                counts[first + offset] += n

        if counts[first] >= 3:
            take({0: 3}, ("triplet", first), with_pair)
        if not honors and first <= 6 and counts[first + 1] and counts[first + 2]:
            take({0: 1, 1: 1, 2: 1}, ("sequence", first), with_pair)
        if with_pair and counts[first] >= 2:
            take({0: 2}, ("pair", first), False)
        return found

    def cache_info(self) -> dict[str, int]:
        return {"summaries": len(self._summaries), "arrangements": len(self._arrangements)}

    def clear(self) -> None:
        self._summaries.clear()
        self._arrangements.clear()
        logger.debug("block caches cleared")


decomposer = BlockDecomposer()


def block_summaries(block: Sequence[int], honors: bool = False) -> frozenset[Summary]:
    return decomposer.summaries(block, honors)


def complete_arrangements(block: Sequence[int], honors: bool = False, with_pair: bool = False) -> tuple[Arrangement, ...]:
    return decomposer.arrangements(block, honors, with_pair)


def reachable_states(size: int = 9, max_tiles: int = 14) -> Iterator[tuple[int, ...]]:
    """Yield every block count vector with at most ``max_tiles`` tiles."""
    for block in product(range(5), repeat=size):
        if sum(block) <= max_tiles:
            yield block


def cache_info() -> dict[str, int]:
    return decomposer.cache_info()


def clear_caches() -> None:
    decomposer.clear()
