from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from riichi_core.errors import InvalidContext, InvalidHand
from riichi_core.tiles import KINDS, TILE_RE, index_to_tile, tile_to_index

if TYPE_CHECKING:
    from riichi_core.schemas import Context, Group

MAX_TILES = 14


def validate_tile(tile: str) -> None:
    if not TILE_RE.fullmatch(tile):
        raise InvalidHand(f"Invalid tile code: {tile}")


def validate_counts(counts: Sequence[int]) -> None:
    if len(counts) != KINDS:
        raise InvalidHand(f"Tile counts must cover {KINDS} kinds, got {len(counts)}")
    for index, count in enumerate(counts):
        if count < 0:
            raise InvalidHand(f"Negative tile count for {index_to_tile(index)}")
        if count > 4:
            raise InvalidHand(f"Tile appears 5+ times in hand: {index_to_tile(index)}")
    total = sum(counts)
    if not 1 <= total <= MAX_TILES:
        raise InvalidHand(f"Hand must hold 1-{MAX_TILES} tiles, got {total}")


def validate_calls(counts: Sequence[int], calls: Sequence[Group]) -> None:
    if len(calls) > 4:
        raise InvalidHand("A hand cannot hold more than 4 calls")

    combined = list(counts)
    for group in calls:
        if not group.is_meld:
            raise InvalidHand(f"Calls must be triplets, quads or sequences, got {group.type.value}")
        if group.kan and group.type.value != "triplet":
            raise InvalidHand("Only triplets can be declared as quads")
        first = group.first
        if group.type.value == "sequence" and (first >= 27 or first % 9 > 6):
            raise InvalidHand(f"Invalid sequence starting at {index_to_tile(first)}")
        for tile in group.tiles:
            combined[tile] += 1
        if group.kan:
            combined[first] += 1

    for index, count in enumerate(combined):
        if count > 4:
            raise InvalidHand(f"Tile appears 5+ times in hand and calls: {index_to_tile(index)}")

    shape_tiles = sum(counts) + 3 * len(calls)
    if shape_tiles > MAX_TILES:
        raise InvalidHand(
            f"Concealed tiles plus 3 per call must not exceed {MAX_TILES}, got {shape_tiles}"
        )


def validate_context(context: Context) -> None:
    if context.win_tile is not None:
        validate_tile(context.win_tile)
    for tile in context.dora_indicators:
        validate_tile(tile)
    for tile in context.ura_dora_indicators:
        validate_tile(tile)

    if context.riichi and context.double_riichi:
        raise InvalidContext("riichi and double_riichi cannot both be true")
    if not (context.riichi or context.double_riichi) and context.ippatsu:
        raise InvalidContext("ippatsu cannot be true when riichi/double_riichi is false")
    if context.win_type == "ron" and context.haitei:
        raise InvalidContext("haitei cannot be true on ron")
    if context.win_type == "tsumo" and context.houtei:
        raise InvalidContext("houtei cannot be true on tsumo")
    if context.win_type == "ron" and context.rinshan:
        raise InvalidContext("rinshan requires tsumo")
    if context.win_type == "tsumo" and context.chankan:
        raise InvalidContext("chankan requires ron")
    if context.chiihou and context.tenhou:
        raise InvalidContext("chiihou and tenhou cannot both be true")
    if (context.chiihou or context.tenhou) and context.win_type != "tsumo":
        raise InvalidContext("chiihou/tenhou require tsumo")
    if context.tenhou and not context.is_dealer:
        raise InvalidContext("tenhou requires dealer")
    if context.chiihou and context.is_dealer:
        raise InvalidContext("chiihou requires non-dealer")


def validate_win_tile(counts: Sequence[int], context: Context) -> None:
    if context.win_tile is None:
        return
    if counts[tile_to_index(context.win_tile)] == 0:
        raise InvalidContext(f"Winning tile {context.win_tile} is not in the concealed hand")
