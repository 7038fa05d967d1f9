from __future__ import annotations

from collections.abc import Sequence
from itertools import product

import structlog

from riichi_core.cache import ShantenCache
from riichi_core.config import settings
from riichi_core.decomposer import block_summaries, complete_arrangements
from riichi_core.errors import InvalidHand
from riichi_core.schemas import Decomposition, Group, ShantenResult, ShapeFamily, TileCounts
from riichi_core.tiles import KINDS, TERMINAL_HONOR_INDICES, TileKind
from riichi_core.validators import validate_calls

logger = structlog.get_logger()

_BLOCKS = ((0, 9, False), (9, 18, False), (18, 27, False), (27, 34, True))

shanten_cache: ShantenCache[ShantenResult] = ShantenCache(max_size=settings.shanten_cache_size)


def _meld_budget(total: int, calls: int) -> int:
    return min(4, (total + 3 * calls) // 3) - calls


def _formula(budget: int, melds: int, partials: int, pair: int) -> int:
    room = max(budget - melds, 0)
    value = 2 * room - min(partials, room)
    if pair:
        value = min(value, 2 * room - min(partials - 1, room) - 1)
    return value


def _standard_shanten(counts: Sequence[int], budget: int) -> int:
    options = [sorted(block_summaries(counts[lo:hi], honors), reverse=True) for lo, hi, honors in _BLOCKS]
    suffix = [(0, 0)] * (len(options) + 1)
    for i in range(len(options) - 1, -1, -1):
        max_m = max(m for m, _, _ in options[i])
        max_t = max(t for _, t, _ in options[i])
        suffix[i] = (suffix[i + 1][0] + max_m, suffix[i + 1][1] + max_t)

    best = _formula(budget, 0, 0, 0)

    def visit(i: int, melds: int, partials: int, pair: int) -> None:
        nonlocal best
        if i == len(options):
            best = min(best, _formula(budget, melds, partials, pair))
            return
        bound_m, bound_t = suffix[i]
        if _formula(budget, melds + bound_m, partials + bound_t, 1) >= best:
            return
        for m, t, p in options[i]:
            visit(i + 1, melds + m, partials + t, pair or p)

    visit(0, 0, 0, 0)
    return best


def _seven_pairs_shanten(counts: Sequence[int]) -> int:
    pairs = sum(1 for c in counts if c >= 2)
    kinds = sum(1 for c in counts if c > 0)
    return 6 - pairs + max(0, 7 - kinds)


def _thirteen_orphans_shanten(counts: Sequence[int]) -> int:
    held = sum(1 for i in TERMINAL_HONOR_INDICES if counts[i] > 0)
    paired = any(counts[i] >= 2 for i in TERMINAL_HONOR_INDICES)
    return max(13 - held - (1 if paired else 0), -1)


def _standard_decompositions(counts: Sequence[int], calls: Sequence[Group]) -> list[Decomposition]:
    found: list[Decomposition] = []
    for pair_block in range(len(_BLOCKS)):
        per_block = [
            complete_arrangements(counts[lo:hi], honors, with_pair=(i == pair_block))
            for i, (lo, hi, honors) in enumerate(_BLOCKS)
        ]
        for choice in product(*per_block):
            groups: list[Group] = []
            for (lo, _, _), arrangement in zip(_BLOCKS, choice):
                for kind, offset in arrangement:
                    if kind == "triplet":
                        groups.append(Group.triplet(lo + offset))
                    elif kind == "sequence":
                        groups.append(Group.sequence(lo + offset))
                    else:
                        groups.append(Group.pair(lo + offset))
            groups.extend(calls)
            found.append(Decomposition(family=ShapeFamily.standard, groups=tuple(groups)))
    return found


def _seven_pairs_decomposition(counts: Sequence[int]) -> Decomposition:
    groups = tuple(Group.pair(i) for i, c in enumerate(counts) if c == 2)
    return Decomposition(family=ShapeFamily.seven_pairs, groups=groups)


def _thirteen_orphans_decomposition(counts: Sequence[int]) -> Decomposition:
    groups = tuple(Group.pair(i) if counts[i] == 2 else Group.single(i) for i in TERMINAL_HONOR_INDICES)
    return Decomposition(family=ShapeFamily.thirteen_orphans, groups=groups)


def _compute(counts: tuple[int, ...], calls: tuple[Group, ...]) -> ShantenResult:
    total = sum(counts)
    standard = _standard_shanten(counts, _meld_budget(total, len(calls)))
    seven_pairs = thirteen_orphans = None
    if not calls and total >= 13:
        seven_pairs = _seven_pairs_shanten(counts)
        thirteen_orphans = _thirteen_orphans_shanten(counts)

    values = [v for v in (standard, seven_pairs, thirteen_orphans) if v is not None]
    best = max(min(values), -1)

    decompositions: list[Decomposition] = []
    if best == -1:
        if standard == -1:
            decompositions.extend(_standard_decompositions(counts, calls))
        if seven_pairs == -1:
            decompositions.append(_seven_pairs_decomposition(counts))
        if thirteen_orphans == -1:
            decompositions.append(_thirteen_orphans_decomposition(counts))

    return ShantenResult(
        shanten=best,
        standard=max(standard, -1),
        seven_pairs=seven_pairs,
        thirteen_orphans=thirteen_orphans,
        decompositions=tuple(decompositions),
    )


def _checked_calls(hand: TileCounts, calls: Sequence[Group]) -> tuple[Group, ...]:
    calls = tuple(calls)
    validate_calls(hand.counts, calls)
    return calls


def shanten(hand: TileCounts, calls: Sequence[Group] = ()) -> ShantenResult:
    """Minimum shanten over the standard, seven-pairs and thirteen-orphans shapes.

    ``calls`` are melds already formed by calling (open triplets, sequences and
    quads, or closed quads); each one takes a meld slot out of the budget.
    When the hand is complete, every winning decomposition is returned.
    """
    calls = _checked_calls(hand, calls)
    key = (hand.counts, calls)
    result = shanten_cache.get(key)
    if result is None:
        result = _compute(hand.counts, calls)
        shanten_cache.put(key, result)
        logger.debug(
            "shanten computed",
            shanten=result.shanten,
            tiles=hand.total,
            calls=len(calls),
            decompositions=len(result.decompositions),
        )
    return result


def waits(hand: TileCounts, calls: Sequence[Group] = ()) -> list[TileKind]:
    """Kinds that would complete the hand if drawn; empty unless the hand is tenpai."""
    calls = _checked_calls(hand, calls)
    if hand.total + 3 * len(calls) >= 14:
        raise InvalidHand("waits are defined for hands that still need a tile")

    held = list(hand.counts)
    for group in calls:
        for tile in group.tiles:
            held[tile] += 1
        if group.kan:
            held[group.first] += 1

    result: list[TileKind] = []
    for index in range(KINDS):
        if held[index] >= 4:
            continue
        counts = list(hand.counts)
        counts[index] += 1
        completed = shanten(TileCounts(counts=tuple(counts)), calls)
        if completed.is_complete:
            result.append(TileKind.from_index(index))
    return result


def discard_shanten(hand: TileCounts, calls: Sequence[Group] = ()) -> dict[TileKind, int]:
    """Shanten remaining after discarding one tile of each held kind."""
    calls = _checked_calls(hand, calls)
    if hand.total < 2:
        raise InvalidHand("discard analysis needs at least 2 tiles")

    result: dict[TileKind, int] = {}
    for index, count in enumerate(hand.counts):
        if count == 0:
            continue
        counts = list(hand.counts)
        counts[index] -= 1
        result[TileKind.from_index(index)] = shanten(TileCounts(counts=tuple(counts)), calls).shanten
    return result
