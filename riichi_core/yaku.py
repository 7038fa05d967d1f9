from __future__ import annotations

from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass

import structlog

from riichi_core.errors import IncompleteHand, NoYaku
from riichi_core.names import Yaku, yaku_name
from riichi_core.schemas import (
    Context,
    Decomposition,
    DoraBreakdown,
    Group,
    GroupType,
    RuleSet,
    ShapeFamily,
    WinType,
    YakuItem,
    YakuResult,
)
from riichi_core.tiles import (
    CHUN,
    DRAGONS,
    GREEN_INDICES,
    HAKU,
    HATSU,
    WINDS,
    is_honor,
    is_simple,
    is_terminal,
    is_terminal_or_honor,
    next_dora,
    tile_to_index,
)

logger = structlog.get_logger()

YAKUMAN_HAN = 13

WaitShape = str  # "ryanmen" | "kanchan" | "penchan" | "tanki" | "shanpon" | "kokushi_13" | ""


def is_complete_decomposition(decomposition: Decomposition) -> bool:
    groups = decomposition.groups
    if any(g.type == GroupType.partial for g in groups):
        return False
    if decomposition.family == ShapeFamily.standard:
        pairs = [g for g in groups if g.type == GroupType.pair]
        melds = [g for g in groups if g.is_meld]
        return len(pairs) == 1 and len(melds) == 4 and len(groups) == 5
    if decomposition.family == ShapeFamily.seven_pairs:
        kinds = {g.first for g in groups}
        return len(groups) == 7 and len(kinds) == 7 and all(g.type == GroupType.pair for g in groups)
    pairs = [g for g in groups if g.type == GroupType.pair]
    kinds = {g.first for g in groups}
    return len(groups) == 13 and len(pairs) == 1 and all(is_terminal_or_honor(k) for k in kinds) and len(kinds) == 13


def wait_shape(decomposition: Decomposition, win_tile: int | None) -> WaitShape:
    group = decomposition.wait_group
    if group is None or win_tile is None:
        return ""
    if decomposition.family == ShapeFamily.thirteen_orphans:
        return "kokushi_13" if group.type == GroupType.pair else "tanki"
    if group.type == GroupType.pair:
        return "tanki"
    if group.type == GroupType.triplet:
        return "shanpon"
    position = win_tile - group.first
    rank = group.first % 9
    if position == 1:
        return "kanchan"
    if (position == 0 and rank == 6) or (position == 2 and rank == 0):
        return "penchan"
    return "ryanmen"


@dataclass
class HandView:
    """Facts about one decomposition under one context, shared by all predicates."""

    decomposition: Decomposition
    counts: list[int]
    is_closed: bool
    family: ShapeFamily
    triplets: list[Group]
    sequences: list[Group]
    pair: int | None
    win_tile: int | None
    wait: WaitShape
    concealed_triplets: int
    kans: int

    @classmethod
    def build(cls, decomposition: Decomposition, context: Context) -> HandView:
        win_tile = context.win_index
        triplets = decomposition.triplets
        pairs = decomposition.pairs
        concealed = 0
        for index, group in enumerate(decomposition.groups):
            if group.type != GroupType.triplet or group.open:
                continue
            if context.win_type == WinType.ron and index == decomposition.wait_index and not group.kan:
                continue
            concealed += 1
        return cls(
            decomposition=decomposition,
            counts=decomposition.counts,
            is_closed=decomposition.is_closed,
            family=decomposition.family,
            triplets=triplets,
            sequences=decomposition.sequences,
            pair=pairs[0].first if decomposition.family == ShapeFamily.standard and pairs else None,
            win_tile=win_tile,
            wait=wait_shape(decomposition, win_tile),
            concealed_triplets=concealed,
            kans=sum(1 for g in triplets if g.kan),
        )

    @property
    def standard(self) -> bool:
        return self.family == ShapeFamily.standard

    @property
    def tiles(self) -> list[int]:
        return [i for i, c in enumerate(self.counts) if c > 0]

    def has_triplet(self, tile: int) -> bool:
        return any(g.first == tile for g in self.triplets)

    def peikou(self) -> int:
        if not self.is_closed or not self.standard:
            return 0
        firsts = Counter(g.first for g in self.sequences)
        return sum(c // 2 for c in firsts.values())

    def suits(self) -> set[int]:
        return {i // 9 for i in self.tiles if not is_honor(i)}

    def has_honors(self) -> bool:
        return any(is_honor(i) for i in self.tiles)

    def all_groups_have(self, check: Callable[[int], bool]) -> bool:
        return all(any(check(t) for t in g.tiles) for g in self.decomposition.groups)


def _value_tiles(context: Context) -> set[int]:
    return {context.round_wind.tile_index, context.seat_wind.tile_index, *DRAGONS}


def _kuisagari(view: HandView, closed_han: int) -> int:
    return closed_han if view.is_closed else closed_han - 1


def _riichi(v: HandView, c: Context, r: RuleSet) -> int | None:
    return 1 if c.riichi and v.is_closed else None


def _double_riichi(v: HandView, c: Context, r: RuleSet) -> int | None:
    return 2 if c.double_riichi and v.is_closed else None


def _ippatsu(v: HandView, c: Context, r: RuleSet) -> int | None:
    return 1 if c.ippatsu and (c.riichi or c.double_riichi) and v.is_closed else None


def _menzen_tsumo(v: HandView, c: Context, r: RuleSet) -> int | None:
    return 1 if c.win_type == WinType.tsumo and v.is_closed else None


def _pinfu(v: HandView, c: Context, r: RuleSet) -> int | None:
    if not v.standard or not v.is_closed or v.triplets:
        return None
    if v.pair in _value_tiles(c):
        return None
    return 1 if v.wait == "ryanmen" else None


def _tanyao(v: HandView, c: Context, r: RuleSet) -> int | None:
    if not v.is_closed and not r.kuitan_ari:
        return None
    return 1 if all(is_simple(i) for i in v.tiles) else None


def _iipeikou(v: HandView, c: Context, r: RuleSet) -> int | None:
    return 1 if v.peikou() >= 1 else None


def _dragon(tile: int) -> Callable[[HandView, Context, RuleSet], int | None]:
    def check(v: HandView, c: Context, r: RuleSet) -> int | None:
        return 1 if v.has_triplet(tile) else None

    return check


def _seat_wind(v: HandView, c: Context, r: RuleSet) -> int | None:
    return 1 if v.has_triplet(c.seat_wind.tile_index) else None


def _round_wind(v: HandView, c: Context, r: RuleSet) -> int | None:
    return 1 if v.has_triplet(c.round_wind.tile_index) else None


def _haitei(v: HandView, c: Context, r: RuleSet) -> int | None:
    return 1 if c.haitei and c.win_type == WinType.tsumo else None


def _houtei(v: HandView, c: Context, r: RuleSet) -> int | None:
    return 1 if c.houtei and c.win_type == WinType.ron else None


def _rinshan(v: HandView, c: Context, r: RuleSet) -> int | None:
    return 1 if c.rinshan else None


def _chankan(v: HandView, c: Context, r: RuleSet) -> int | None:
    return 1 if c.chankan else None


def _chiitoitsu(v: HandView, c: Context, r: RuleSet) -> int | None:
    return 2 if v.family == ShapeFamily.seven_pairs else None


def _chanta(v: HandView, c: Context, r: RuleSet) -> int | None:
    if not v.standard or not v.sequences or not v.has_honors():
        return None
    if not v.all_groups_have(is_terminal_or_honor):
        return None
    return _kuisagari(v, 2)


def _ittsu(v: HandView, c: Context, r: RuleSet) -> int | None:
    if not v.standard:
        return None
    firsts = {g.first for g in v.sequences}
    for base in (0, 9, 18):
        if {base, base + 3, base + 6} <= firsts:
            return _kuisagari(v, 2)
    return None


def _sanshoku_doujun(v: HandView, c: Context, r: RuleSet) -> int | None:
    firsts = {g.first for g in v.sequences}
    for rank in range(7):
        if {rank, rank + 9, rank + 18} <= firsts:
            return _kuisagari(v, 2)
    return None


def _sanshoku_doukou(v: HandView, c: Context, r: RuleSet) -> int | None:
    tiles = {g.first for g in v.triplets}
    for rank in range(9):
        if {rank, rank + 9, rank + 18} <= tiles:
            return 2
    return None


def _toitoi(v: HandView, c: Context, r: RuleSet) -> int | None:
    return 2 if v.standard and len(v.triplets) == 4 else None


def _sanankou(v: HandView, c: Context, r: RuleSet) -> int | None:
    return 2 if v.concealed_triplets >= 3 else None


def _sankantsu(v: HandView, c: Context, r: RuleSet) -> int | None:
    return 2 if v.kans == 3 else None


def _shousangen(v: HandView, c: Context, r: RuleSet) -> int | None:
    dragon_triplets = sum(1 for d in DRAGONS if v.has_triplet(d))
    return 2 if dragon_triplets == 2 and v.pair in DRAGONS else None


def _honroutou(v: HandView, c: Context, r: RuleSet) -> int | None:
    if v.family == ShapeFamily.thirteen_orphans:
        return None
    tiles = v.tiles
    if not all(is_terminal_or_honor(i) for i in tiles):
        return None
    if not any(is_honor(i) for i in tiles) or all(is_honor(i) for i in tiles):
        return None
    return 2


def _honitsu(v: HandView, c: Context, r: RuleSet) -> int | None:
    if len(v.suits()) == 1 and v.has_honors():
        return _kuisagari(v, 3)
    return None


def _junchan(v: HandView, c: Context, r: RuleSet) -> int | None:
    if not v.standard or not v.sequences or v.has_honors():
        return None
    if not v.all_groups_have(is_terminal):
        return None
    return _kuisagari(v, 3)


def _ryanpeikou(v: HandView, c: Context, r: RuleSet) -> int | None:
    return 3 if v.peikou() == 2 else None


def _chinitsu(v: HandView, c: Context, r: RuleSet) -> int | None:
    if len(v.suits()) == 1 and not v.has_honors():
        return _kuisagari(v, 6)
    return None


def _double(r: RuleSet) -> int:
    return YAKUMAN_HAN * (2 if r.double_yakuman_ari else 1)


def _kokushi(v: HandView, c: Context, r: RuleSet) -> int | None:
    return YAKUMAN_HAN if v.family == ShapeFamily.thirteen_orphans else None


def _kokushi_13(v: HandView, c: Context, r: RuleSet) -> int | None:
    return _double(r) if v.wait == "kokushi_13" else None


def _suuankou(v: HandView, c: Context, r: RuleSet) -> int | None:
    return YAKUMAN_HAN if v.standard and v.concealed_triplets == 4 else None


def _suuankou_tanki(v: HandView, c: Context, r: RuleSet) -> int | None:
    if v.standard and v.concealed_triplets == 4 and v.wait == "tanki":
        return _double(r)
    return None


def _daisangen(v: HandView, c: Context, r: RuleSet) -> int | None:
    return YAKUMAN_HAN if all(v.has_triplet(d) for d in DRAGONS) else None


def _shousuushii(v: HandView, c: Context, r: RuleSet) -> int | None:
    wind_triplets = sum(1 for w in WINDS if v.has_triplet(w))
    return YAKUMAN_HAN if wind_triplets == 3 and v.pair in WINDS else None


def _daisuushii(v: HandView, c: Context, r: RuleSet) -> int | None:
    return _double(r) if all(v.has_triplet(w) for w in WINDS) else None


def _tsuuiisou(v: HandView, c: Context, r: RuleSet) -> int | None:
    return YAKUMAN_HAN if all(is_honor(i) for i in v.tiles) else None


def _ryuuiisou(v: HandView, c: Context, r: RuleSet) -> int | None:
    return YAKUMAN_HAN if all(i in GREEN_INDICES for i in v.tiles) else None


def _chinroutou(v: HandView, c: Context, r: RuleSet) -> int | None:
    return YAKUMAN_HAN if all(is_terminal(i) for i in v.tiles) else None


def _suukantsu(v: HandView, c: Context, r: RuleSet) -> int | None:
    return YAKUMAN_HAN if v.kans == 4 else None


_CHUUREN_BASE = (3, 1, 1, 1, 1, 1, 1, 1, 3)


def _chuuren_extra(v: HandView) -> int | None:
    if not v.standard or not v.is_closed or v.has_honors() or len(v.suits()) != 1:
        return None
    base = next(iter(v.suits())) * 9
    ranks = v.counts[base : base + 9]
    extras = [rank for rank in range(9) for _ in range(ranks[rank] - _CHUUREN_BASE[rank])]
    if any(ranks[rank] < _CHUUREN_BASE[rank] for rank in range(9)) or len(extras) != 1:
        return None
    return base + extras[0]


def _chuuren(v: HandView, c: Context, r: RuleSet) -> int | None:
    return YAKUMAN_HAN if _chuuren_extra(v) is not None else None


def _junsei_chuuren(v: HandView, c: Context, r: RuleSet) -> int | None:
    extra = _chuuren_extra(v)
    if extra is not None and v.win_tile == extra:
        return _double(r)
    return None


def _tenhou(v: HandView, c: Context, r: RuleSet) -> int | None:
    return YAKUMAN_HAN if c.tenhou and v.is_closed else None


def _chiihou(v: HandView, c: Context, r: RuleSet) -> int | None:
    return YAKUMAN_HAN if c.chiihou and v.is_closed else None


Predicate = Callable[[HandView, Context, RuleSet], "int | None"]

ORDINARY_YAKU: tuple[tuple[Yaku, Predicate], ...] = (
    (Yaku.riichi, _riichi),
    (Yaku.double_riichi, _double_riichi),
    (Yaku.ippatsu, _ippatsu),
    (Yaku.menzen_tsumo, _menzen_tsumo),
    (Yaku.pinfu, _pinfu),
    (Yaku.tanyao, _tanyao),
    (Yaku.iipeikou, _iipeikou),
    (Yaku.haku, _dragon(HAKU)),
    (Yaku.hatsu, _dragon(HATSU)),
    (Yaku.chun, _dragon(CHUN)),
    (Yaku.seat_wind, _seat_wind),
    (Yaku.round_wind, _round_wind),
    (Yaku.haitei, _haitei),
    (Yaku.houtei, _houtei),
    (Yaku.rinshan, _rinshan),
    (Yaku.chankan, _chankan),
    (Yaku.chiitoitsu, _chiitoitsu),
    (Yaku.chanta, _chanta),
    (Yaku.ittsu, _ittsu),
    (Yaku.sanshoku_doujun, _sanshoku_doujun),
    (Yaku.sanshoku_doukou, _sanshoku_doukou),
    (Yaku.toitoi, _toitoi),
    (Yaku.sanankou, _sanankou),
    (Yaku.sankantsu, _sankantsu),
    (Yaku.shousangen, _shousangen),
    (Yaku.honroutou, _honroutou),
    (Yaku.honitsu, _honitsu),
    (Yaku.junchan, _junchan),
    (Yaku.ryanpeikou, _ryanpeikou),
    (Yaku.chinitsu, _chinitsu),
)

YAKUMAN: tuple[tuple[Yaku, Predicate], ...] = (
    (Yaku.kokushi, _kokushi),
    (Yaku.kokushi_13, _kokushi_13),
    (Yaku.suuankou, _suuankou),
    (Yaku.suuankou_tanki, _suuankou_tanki),
    (Yaku.daisangen, _daisangen),
    (Yaku.shousuushii, _shousuushii),
    (Yaku.daisuushii, _daisuushii),
    (Yaku.tsuuiisou, _tsuuiisou),
    (Yaku.ryuuiisou, _ryuuiisou),
    (Yaku.chinroutou, _chinroutou),
    (Yaku.suukantsu, _suukantsu),
    (Yaku.chuuren, _chuuren),
    (Yaku.junsei_chuuren, _junsei_chuuren),
    (Yaku.tenhou, _tenhou),
    (Yaku.chiihou, _chiihou),
)

# (kept, dropped): when both hold, the second is removed.
EXCLUSIONS: tuple[tuple[Yaku, Yaku], ...] = (
    (Yaku.double_riichi, Yaku.riichi),
    (Yaku.ryanpeikou, Yaku.iipeikou),
    (Yaku.junchan, Yaku.chanta),
    (Yaku.honroutou, Yaku.chanta),
    (Yaku.chinitsu, Yaku.honitsu),
    (Yaku.kokushi_13, Yaku.kokushi),
    (Yaku.suuankou_tanki, Yaku.suuankou),
    (Yaku.junsei_chuuren, Yaku.chuuren),
    (Yaku.daisuushii, Yaku.shousuushii),
)


def _collect(
    registry: tuple[tuple[Yaku, Predicate], ...], view: HandView, context: Context, rules: RuleSet
) -> dict[Yaku, int]:
    hits: dict[Yaku, int] = {}
    for key, predicate in registry:
        han = predicate(view, context, rules)
        if han:
            hits[key] = han
    return hits


def _apply_exclusions(hits: dict[Yaku, int]) -> dict[Yaku, int]:
    dropped = {loser for winner, loser in EXCLUSIONS if winner in hits and loser in hits}
    return {key: han for key, han in hits.items() if key not in dropped}


def _count_dora(counts: list[int], indicators: tuple[str, ...]) -> int:
    return sum(counts[next_dora(tile_to_index(ind))] for ind in indicators)


def count_dora(view: HandView, context: Context, rules: RuleSet) -> DoraBreakdown:
    ura = 0
    if context.riichi or context.double_riichi:
        ura = _count_dora(view.counts, context.ura_dora_indicators)
    return DoraBreakdown(
        dora=_count_dora(view.counts, context.dora_indicators),
        aka_dora=context.aka_dora_count if rules.aka_ari else 0,
        ura_dora=ura,
    )


def _item(key: Yaku, han: int, view: HandView, context: Context, rules: RuleSet, yakuman: bool) -> YakuItem:
    wind = None
    if key == Yaku.seat_wind:
        wind = context.seat_wind.value
    elif key == Yaku.round_wind:
        wind = context.round_wind.value
    name = yaku_name(key, rules.display_lang, is_open=not view.is_closed, wind=wind)
    return YakuItem(key=key, name=name, han=han, yakuman=yakuman)


def evaluate_yaku(decomposition: Decomposition, context: Context, rules: RuleSet | None = None) -> YakuResult:
    """Evaluate every yaku predicate against one complete decomposition.

    Ordinary yaku are collected first, then yakuman. Exclusions are applied
    afterwards; any yakuman discards the ordinary yaku and dora, and several
    yakuman add up. Raises ``NoYaku`` when nothing but dora would remain.
    """
    rules = rules or RuleSet()
    if not is_complete_decomposition(decomposition):
        raise IncompleteHand("decomposition does not form a complete winning shape")

    view = HandView.build(decomposition, context)
    ordinary = _apply_exclusions(_collect(ORDINARY_YAKU, view, context, rules))
    yakuman = _apply_exclusions(_collect(YAKUMAN, view, context, rules))

    if yakuman:
        items = tuple(_item(key, han, view, context, rules, True) for key, han in yakuman.items())
        multiplier = sum(han for han in yakuman.values()) // YAKUMAN_HAN
        return YakuResult(yaku=items, dora=DoraBreakdown(), yakuman_multiplier=multiplier)

    if not ordinary:
        logger.debug("no yaku", family=decomposition.family.value, wait=view.wait)
        raise NoYaku("No yaku: dora-only hands cannot win")

    items = tuple(_item(key, han, view, context, rules, False) for key, han in ordinary.items())
    return YakuResult(yaku=items, dora=count_dora(view, context, rules))
