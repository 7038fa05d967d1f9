from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, conint, model_validator

from riichi_core.names import DisplayLang, Yaku
from riichi_core.tiles import KINDS, WINDS, TileKind, index_to_tile, tile_to_index
from riichi_core.validators import validate_counts


class Wind(str, Enum):
    E = "E"
    S = "S"
    W = "W"
    N = "N"

    @property
    def tile_index(self) -> int:
        return WINDS[("E", "S", "W", "N").index(self.value)]


class WinType(str, Enum):
    ron = "ron"
    tsumo = "tsumo"


class GroupType(str, Enum):
    triplet = "triplet"
    sequence = "sequence"
    pair = "pair"
    partial = "partial"
    single = "single"


class PartialKind(str, Enum):
    pair = "pair"
    two_sided = "two_sided"
    edge_or_closed = "edge_or_closed"


class ShapeFamily(str, Enum):
    standard = "standard"
    seven_pairs = "seven_pairs"
    thirteen_orphans = "thirteen_orphans"


TileCode = str


class TileCounts(BaseModel):
    counts: tuple[int, ...]

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_counts(self) -> TileCounts:
        validate_counts(self.counts)
        return self

    @classmethod
    def from_tiles(cls, tiles: Iterable[TileCode]) -> TileCounts:
        counts = [0] * KINDS
        for tile in tiles:
            counts[tile_to_index(tile)] += 1
        return cls(counts=tuple(counts))

    @classmethod
    def from_kinds(cls, kinds: Iterable[TileKind]) -> TileCounts:
        counts = [0] * KINDS
        for kind in kinds:
            counts[kind.index] += 1
        return cls(counts=tuple(counts))

    @property
    def total(self) -> int:
        return sum(self.counts)

    def __getitem__(self, index: int) -> int:
        return self.counts[index]

    def kinds(self) -> list[TileKind]:
        return [TileKind.from_index(i) for i, c in enumerate(self.counts) for _ in range(c)]

    def to_tiles(self) -> list[TileCode]:
        return [index_to_tile(i) for i, c in enumerate(self.counts) for _ in range(c)]


class Group(BaseModel):
    type: GroupType
    tiles: tuple[int, ...]
    open: bool = False
    kan: bool = False
    partial: PartialKind | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def triplet(cls, tile: int, open: bool = False, kan: bool = False) -> Group:
        return cls(type=GroupType.triplet, tiles=(tile, tile, tile), open=open, kan=kan)

    @classmethod
    def sequence(cls, first: int, open: bool = False) -> Group:
        return cls(type=GroupType.sequence, tiles=(first, first + 1, first + 2), open=open)

    @classmethod
    def pair(cls, tile: int) -> Group:
        return cls(type=GroupType.pair, tiles=(tile, tile))

    @classmethod
    def single(cls, tile: int) -> Group:
        return cls(type=GroupType.single, tiles=(tile,))

    @property
    def first(self) -> int:
        return self.tiles[0]

    @property
    def kinds(self) -> tuple[TileKind, ...]:
        return tuple(TileKind.from_index(t) for t in self.tiles)

    @property
    def is_meld(self) -> bool:
        return self.type in {GroupType.triplet, GroupType.sequence}

    @property
    def tile_count(self) -> int:
        return 4 if self.kan else len(self.tiles)


class Decomposition(BaseModel):
    family: ShapeFamily
    groups: tuple[Group, ...]
    wait_index: int | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_closed(self) -> bool:
        return not any(g.open for g in self.groups)

    @property
    def tile_count(self) -> int:
        return sum(g.tile_count for g in self.groups)

    @property
    def counts(self) -> list[int]:
        counts = [0] * KINDS
        for group in self.groups:
            for tile in group.tiles:
                counts[tile] += 1
            if group.kan:
                counts[group.first] += 1
        return counts

    @property
    def melds(self) -> list[Group]:
        return [g for g in self.groups if g.is_meld]

    @property
    def triplets(self) -> list[Group]:
        return [g for g in self.groups if g.type == GroupType.triplet]

    @property
    def sequences(self) -> list[Group]:
        return [g for g in self.groups if g.type == GroupType.sequence]

    @property
    def pairs(self) -> list[Group]:
        return [g for g in self.groups if g.type == GroupType.pair]

    @property
    def wait_group(self) -> Group | None:
        if self.wait_index is None:
            return None
        return self.groups[self.wait_index]


class ShantenResult(BaseModel):
    shanten: int
    standard: int
    seven_pairs: int | None = None
    thirteen_orphans: int | None = None
    decompositions: tuple[Decomposition, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def is_complete(self) -> bool:
        return self.shanten == -1

    @property
    def is_tenpai(self) -> bool:
        return self.shanten == 0


class Context(BaseModel):
    win_type: WinType = WinType.ron
    round_wind: Wind = Wind.E
    seat_wind: Wind = Wind.E
    win_tile: TileCode | None = None
    riichi: bool = False
    double_riichi: bool = False
    ippatsu: bool = False
    haitei: bool = False
    houtei: bool = False
    rinshan: bool = False
    chankan: bool = False
    chiihou: bool = False
    tenhou: bool = False
    dora_indicators: tuple[TileCode, ...] = ()
    ura_dora_indicators: tuple[TileCode, ...] = ()
    aka_dora_count: conint(ge=0) = 0
    honba: conint(ge=0) = 0
    kyotaku: conint(ge=0) = 0

    model_config = ConfigDict(frozen=True)

    @property
    def is_dealer(self) -> bool:
        return self.seat_wind == Wind.E

    @property
    def is_tsumo(self) -> bool:
        return self.win_type == WinType.tsumo

    @property
    def win_index(self) -> int | None:
        if self.win_tile is None:
            return None
        return tile_to_index(self.win_tile)


class RuleSet(BaseModel):
    aka_ari: bool = True
    kuitan_ari: bool = True
    double_yakuman_ari: bool = True
    kazoe_yakuman_ari: bool = True
    renpu_fu: Literal[2, 4] = 4
    kiriage_mangan: bool = False
    tie_break: Literal["fu", "first"] = "fu"
    display_lang: DisplayLang = "ja"

    model_config = ConfigDict(frozen=True)


class YakuItem(BaseModel):
    key: Yaku
    name: str
    han: int
    yakuman: bool = False

    model_config = ConfigDict(frozen=True)


class DoraBreakdown(BaseModel):
    dora: int = 0
    aka_dora: int = 0
    ura_dora: int = 0

    model_config = ConfigDict(frozen=True)

    @property
    def total(self) -> int:
        return self.dora + self.aka_dora + self.ura_dora


class YakuResult(BaseModel):
    yaku: tuple[YakuItem, ...]
    dora: DoraBreakdown = Field(default_factory=DoraBreakdown)
    yakuman_multiplier: int = 0

    model_config = ConfigDict(frozen=True)

    @property
    def yaku_han(self) -> int:
        return sum(item.han for item in self.yaku)

    @property
    def han(self) -> int:
        return self.yaku_han + self.dora.total

    @property
    def is_yakuman(self) -> bool:
        return self.yakuman_multiplier > 0

    @property
    def keys(self) -> list[Yaku]:
        return [item.key for item in self.yaku]

    def has(self, key: Yaku) -> bool:
        return any(item.key == key for item in self.yaku)


class FuBreakdownItem(BaseModel):
    name: str
    fu: int

    model_config = ConfigDict(frozen=True)


class Points(BaseModel):
    ron: int = 0
    tsumo_dealer_pay: int = 0
    tsumo_non_dealer_pay: int = 0

    model_config = ConfigDict(frozen=True)


class Payment(BaseModel):
    payer: Literal["discarder", "dealer", "non_dealer"]
    amount: int

    model_config = ConfigDict(frozen=True)


class Payments(BaseModel):
    hand_points_received: int
    honba_bonus: int = 0
    kyotaku_bonus: int = 0
    total_received: int

    model_config = ConfigDict(frozen=True)


class Score(BaseModel):
    han: int
    fu: int
    base_points: int
    point_label: str
    yaku: tuple[YakuItem, ...] = ()
    yakuman: tuple[str, ...] = ()
    dora: DoraBreakdown = Field(default_factory=DoraBreakdown)
    fu_breakdown: tuple[FuBreakdownItem, ...] = ()
    points: Points
    payments: Payments
    transfers: tuple[Payment, ...] = ()

    model_config = ConfigDict(frozen=True)
