from __future__ import annotations

import re
from enum import Enum
from functools import total_ordering

from pydantic import BaseModel, ConfigDict, conint, model_validator

from riichi_core.errors import InvalidHand

# Tile codes: 1m-9m, 1p-9p, 1s-9s, E S W N (winds), P F C (dragons), 5mr/5pr/5sr (red fives).
TILE_RE = re.compile(r"^(?:[1-9][mps]|5[mps]r|[ESWNPFC])$")

KINDS = 34
SUIT_CODES = ("m", "p", "s")
HONOR_CODES = ("E", "S", "W", "N", "P", "F", "C")

EAST, SOUTH, WEST, NORTH, HAKU, HATSU, CHUN = range(27, 34)
WINDS = (EAST, SOUTH, WEST, NORTH)
DRAGONS = (HAKU, HATSU, CHUN)
TERMINAL_INDICES = (0, 8, 9, 17, 18, 26)
TERMINAL_HONOR_INDICES = TERMINAL_INDICES + tuple(range(27, 34))
GREEN_INDICES = frozenset({19, 20, 21, 23, 25, HATSU})


class Suit(str, Enum):
    man = "man"
    pin = "pin"
    sou = "sou"
    honor = "honor"


_SUITS = (Suit.man, Suit.pin, Suit.sou, Suit.honor)


def is_honor(index: int) -> bool:
    return index >= 27


def is_terminal(index: int) -> bool:
    return index < 27 and index % 9 in {0, 8}


def is_terminal_or_honor(index: int) -> bool:
    return index >= 27 or index % 9 in {0, 8}


def is_simple(index: int) -> bool:
    return index < 27 and 1 <= index % 9 <= 7


def suit_of(index: int) -> int:
    return index // 9


def rank_of(index: int) -> int:
    return index % 9 + 1


def normalize_tile(tile: str) -> str:
    if tile in {"5mr", "5pr", "5sr"}:
        return tile[:2]
    return tile


def tile_to_index(tile: str) -> int:
    if not TILE_RE.fullmatch(tile):
        raise InvalidHand(f"Invalid tile code: {tile}")
    t = normalize_tile(tile)
    if len(t) == 2:
        return SUIT_CODES.index(t[1]) * 9 + int(t[0]) - 1
    return 27 + HONOR_CODES.index(t)


def index_to_tile(index: int) -> str:
    if index < 27:
        return f"{rank_of(index)}{SUIT_CODES[suit_of(index)]}"
    return HONOR_CODES[index - 27]


def next_dora(indicator: int) -> int:
    """Return the dora kind pointed at by an indicator kind."""
    if indicator < 27:
        base = indicator - indicator % 9
        return base + (indicator % 9 + 1) % 9
    if indicator in WINDS:
        return EAST + (indicator - EAST + 1) % 4
    return HAKU + (indicator - HAKU + 1) % 3


@total_ordering
class TileKind(BaseModel):
    suit: Suit
    rank: conint(ge=1, le=9)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_honor_rank(self) -> TileKind:
        if self.suit == Suit.honor and self.rank > 7:
            raise ValueError("honor rank must be within 1-7")
        return self

    @classmethod
    def from_index(cls, index: int) -> TileKind:
        return cls(suit=_SUITS[suit_of(index)], rank=rank_of(index))

    @classmethod
    def from_code(cls, tile: str) -> TileKind:
        return cls.from_index(tile_to_index(tile))

    @property
    def index(self) -> int:
        return _SUITS.index(self.suit) * 9 + self.rank - 1

    @property
    def code(self) -> str:
        return index_to_tile(self.index)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TileKind):
            return NotImplemented
        return self.index < other.index

    def __str__(self) -> str:
        return self.code
