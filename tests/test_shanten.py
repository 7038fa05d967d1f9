import random

import pytest

from riichi_core.errors import InvalidHand
from riichi_core.schemas import Group, ShapeFamily, TileCounts
from riichi_core.shanten import discard_shanten, shanten, shanten_cache, waits
from riichi_core.tiles import TERMINAL_HONOR_INDICES, TileKind, tile_to_index


def hand_of(*tiles: str) -> TileCounts:
    return TileCounts.from_tiles(tiles)


def codes(kinds: list[TileKind]) -> list[str]:
    return [kind.code for kind in kinds]


def test_shanten_complete_standard_hand():
    result = shanten(hand_of("1m", "2m", "3m", "4p", "5p", "6p", "7s", "8s", "9s", "2m", "3m", "4m", "5s", "5s"))
    assert result.shanten == -1
    assert result.is_complete
    assert result.decompositions
    assert all(d.family == ShapeFamily.standard for d in result.decompositions)


def test_shanten_tenpai_and_waits():
    hand = hand_of("1m", "2m", "3m", "4p", "5p", "6p", "7s", "8s", "9s", "2m", "3m", "4m", "5s")
    assert shanten(hand).shanten == 0
    assert codes(waits(hand)) == ["5s"]


def test_shanten_two_sided_waits():
    hand = hand_of("1m", "2m", "3m", "4p", "5p", "6p", "7s", "8s", "9s", "2m", "3m", "E", "E")
    assert codes(waits(hand)) == ["1m", "4m"]


def test_shanten_family_values_for_disconnected_hand():
    hand = hand_of("1m", "4m", "7m", "1p", "4p", "7p", "1s", "4s", "7s", "E", "S", "W", "N", "P")
    result = shanten(hand)
    assert result.standard == 8
    assert result.seven_pairs == 6
    assert result.thirteen_orphans == 5
    assert result.shanten == 5
    assert result.decompositions == ()


def test_shanten_seven_pairs_tenpai():
    hand = hand_of("1m", "1m", "2m", "2m", "3p", "3p", "4p", "4p", "5s", "5s", "6s", "6s", "7s")
    result = shanten(hand)
    assert result.seven_pairs == 0
    assert result.standard == 2
    assert codes(waits(hand)) == ["7s"]


def test_shanten_seven_pairs_does_not_count_quad_as_two_pairs():
    hand = hand_of("1m", "1m", "1m", "1m", "2m", "2m", "3m", "3m", "4m", "4m", "5m", "5m", "6m", "6m")
    assert shanten(hand).seven_pairs == 1


def test_shanten_complete_seven_pairs():
    hand = hand_of("1m", "1m", "3m", "3m", "5p", "5p", "7p", "7p", "9s", "9s", "E", "E", "C", "C")
    result = shanten(hand)
    assert result.shanten == -1
    assert [d.family for d in result.decompositions] == [ShapeFamily.seven_pairs]
    assert len(result.decompositions[0].groups) == 7


def test_shanten_thirteen_orphans_thirteen_sided_wait():
    hand = hand_of("1m", "9m", "1p", "9p", "1s", "9s", "E", "S", "W", "N", "P", "F", "C")
    result = shanten(hand)
    assert result.thirteen_orphans == 0
    assert len(waits(hand)) == 13


def test_shanten_special_shapes_skipped_with_calls():
    hand = hand_of("1m", "1m", "3m", "3m", "5p", "5p", "7p", "7p", "9s", "9s", "E")
    result = shanten(hand, calls=[Group.triplet(tile_to_index("C"), open=True)])
    assert result.seven_pairs is None
    assert result.thirteen_orphans is None


def test_shanten_with_four_calls():
    calls = [
        Group.triplet(tile_to_index("1m"), open=True),
        Group.sequence(tile_to_index("2p"), open=True),
        Group.sequence(tile_to_index("4s"), open=True),
        Group.triplet(tile_to_index("P"), open=True, kan=True),
    ]
    assert shanten(hand_of("E"), calls).shanten == 0
    assert codes(waits(hand_of("E"), calls)) == ["E"]
    complete = shanten(hand_of("E", "E"), calls)
    assert complete.shanten == -1
    assert len(complete.decompositions[0].groups) == 5


def test_shanten_waits_skip_kinds_held_four_times():
    hand = hand_of("1m", "1m", "1m", "1m", "2m", "3m", "4p", "5p", "6p", "7s", "8s", "9s", "E")
    assert "1m" not in codes(waits(hand))
    assert "E" in codes(waits(hand))


def test_shanten_waits_rejects_full_hand():
    with pytest.raises(InvalidHand):
        waits(hand_of("1m", "2m", "3m", "4p", "5p", "6p", "7s", "8s", "9s", "2m", "3m", "4m", "5s", "5s"))


def test_shanten_never_below_minus_one():
    hand = hand_of("2m", "2m", "3m", "3m", "4m", "4m", "5p", "5p", "6p", "6p", "7p", "7p", "8s", "8s")
    result = shanten(hand)
    assert result.shanten == -1
    families = {d.family for d in result.decompositions}
    assert families == {ShapeFamily.standard, ShapeFamily.seven_pairs}


def test_shanten_rejects_five_copies():
    with pytest.raises(InvalidHand):
        hand_of("1m", "1m", "1m", "1m", "1m", "2m", "3m")


def test_shanten_rejects_call_overflow():
    with pytest.raises(InvalidHand):
        shanten(hand_of("1m", "1m", "1m", "2m"), calls=[Group.triplet(tile_to_index("1m"), open=True)])


def test_discard_shanten():
    hand = hand_of("1m", "2m", "3m", "4p", "5p", "6p", "7s", "8s", "9s", "2m", "3m", "4m", "5s", "C")
    result = discard_shanten(hand)
    assert result[TileKind.from_code("C")] == 0
    assert result[TileKind.from_code("5s")] == 0
    assert result[TileKind.from_code("1m")] == 1
    assert all(value >= 0 for value in result.values())


def test_shanten_is_deterministic_and_cached():
    hand = hand_of("1m", "4m", "7m", "2p", "5p", "8p", "3s", "6s", "9s", "E", "S", "W", "P", "C")
    shanten_cache.clear()
    first = shanten(hand)
    second = shanten(hand)
    assert first == second
    assert shanten_cache.hits >= 1


def test_shanten_drawing_changes_by_at_most_one():
    hand = hand_of("1m", "2m", "4p", "5p", "7s", "8s", "9s", "E", "S", "P", "P", "3m", "9p")
    base = shanten(hand).shanten
    for index in range(34):
        counts = list(hand.counts)
        if counts[index] == 4:
            continue
        counts[index] += 1
        assert shanten(TileCounts(counts=tuple(counts))).shanten in {base - 1, base}


def _melds_only(counts: list[int]) -> bool:
    first = next((i for i, c in enumerate(counts) if c), None)
    if first is None:
        return True
    if counts[first] >= 3:
        counts[first] -= 3
        ok = _melds_only(counts)
        counts[first] += 3
        if ok:
            return True
    if first < 27 and first % 9 <= 6 and counts[first + 1] and counts[first + 2]:
        for i in (first, first + 1, first + 2):
            counts[i] -= 1
        ok = _melds_only(counts)
        for i in (first, first + 1, first + 2):
            counts[i] += 1
        return ok
    return False


def is_winning(counts: list[int]) -> bool:
    total = sum(counts)
    if total % 3 != 2:
        return False
    if total == 14 and sorted(c for c in counts if c) == [2] * 7:
        return True
    if total == 14 and all(counts[i] for i in TERMINAL_HONOR_INDICES) and not any(
        c for i, c in enumerate(counts) if i not in TERMINAL_HONOR_INDICES
    ):
        return True
    for index, count in enumerate(counts):
        if count >= 2:
            counts[index] -= 2
            ok = _melds_only(counts)
            counts[index] += 2
            if ok:
                return True
    return False


def random_winning_counts(rng: random.Random, melds: int) -> list[int]:
    while True:
        counts = [0] * 34
        for _ in range(melds):
            if rng.random() < 0.4:
                index = rng.randrange(34)
                counts[index] += 3
            else:
                suit = rng.randrange(3)
                start = suit * 9 + rng.randrange(7)
                for i in (start, start + 1, start + 2):
                    counts[i] += 1
        counts[rng.randrange(34)] += 2
        if max(counts) <= 4:
            return counts


@pytest.mark.parametrize("seed", range(20))
@pytest.mark.parametrize("melds", [0, 1, 2, 3, 4])
def test_shanten_minus_one_exactly_on_winning_shapes(seed, melds):
    rng = random.Random(seed * 10 + melds)
    counts = random_winning_counts(rng, melds)
    assert shanten(TileCounts(counts=tuple(counts))).shanten == -1

    # one tile short: 1, 4, 7, 10 or 13 tiles can never be complete
    for index in {i for i, c in enumerate(counts) if c}:
        short = list(counts)
        short[index] -= 1
        assert shanten(TileCounts(counts=tuple(short))).shanten >= 0

    for _ in range(10):
        swapped = list(counts)
        removed = rng.choice([i for i, c in enumerate(swapped) if c])
        added = rng.choice([i for i, c in enumerate(swapped) if c < 4 and i != removed])
        swapped[removed] -= 1
        swapped[added] += 1
        result = shanten(TileCounts(counts=tuple(swapped)))
        assert (result.shanten == -1) == is_winning(swapped)
        assert result.shanten >= -1


@pytest.mark.parametrize("seed", range(10))
def test_shanten_minus_one_on_seven_pairs_and_thirteen_orphans(seed):
    rng = random.Random(seed)
    pairs = [0] * 34
    for index in rng.sample(range(34), 7):
        pairs[index] = 2
    orphans = [0] * 34
    for index in TERMINAL_HONOR_INDICES:
        orphans[index] = 1
    orphans[rng.choice(TERMINAL_HONOR_INDICES)] += 1

    for counts in (pairs, orphans):
        assert shanten(TileCounts(counts=tuple(counts))).shanten == -1
        swapped = list(counts)
        removed = rng.choice([i for i, c in enumerate(swapped) if c])
        added = rng.choice([i for i, c in enumerate(swapped) if c < 4 and i != removed])
        swapped[removed] -= 1
        swapped[added] += 1
        assert (shanten(TileCounts(counts=tuple(swapped))).shanten == -1) == is_winning(swapped)
