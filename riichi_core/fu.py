from __future__ import annotations

from riichi_core.names import DisplayLang, Yaku
from riichi_core.schemas import (
    Context,
    Decomposition,
    FuBreakdownItem,
    Group,
    GroupType,
    RuleSet,
    ShapeFamily,
    WinType,
    YakuResult,
)
from riichi_core.tiles import DRAGONS, is_terminal_or_honor
from riichi_core.yaku import wait_shape

_FU_NAMES: dict[DisplayLang, dict[str, str]] = {
    "ja": {
        "base": "副底",
        "closed_ron": "門前ロン",
        "tsumo": "ツモ",
        "pair": "雀頭",
        "wait": "待ち",
        "meld": "面子",
        "round_up": "切り上げ",
        "chiitoitsu": "七対子",
    },
    "en": {
        "base": "Base",
        "closed_ron": "Closed Ron",
        "tsumo": "Tsumo",
        "pair": "Pair",
        "wait": "Wait",
        "meld": "Meld",
        "round_up": "Round Up",
        "chiitoitsu": "Seven Pairs",
    },
}

_WAIT_FU_SHAPES = {"kanchan", "penchan", "tanki"}


def _pair_fu(tile: int, context: Context, rules: RuleSet) -> int:
    if tile in DRAGONS:
        return 2
    seat = context.seat_wind.tile_index
    round_ = context.round_wind.tile_index
    if tile == seat and tile == round_:
        return rules.renpu_fu
    if tile in {seat, round_}:
        return 2
    return 0


def _meld_fu(group: Group, is_open: bool) -> int:
    fu = 4 if is_terminal_or_honor(group.first) else 2
    if not is_open:
        fu *= 2
    if group.kan:
        fu *= 4
    return fu


def calculate_fu(
    decomposition: Decomposition,
    context: Context,
    rules: RuleSet,
    yaku_result: YakuResult,
) -> tuple[int, list[FuBreakdownItem]]:
    names = _FU_NAMES[rules.display_lang]
    if yaku_result.is_yakuman:
        return 0, []
    if decomposition.family == ShapeFamily.seven_pairs:
        return 25, [FuBreakdownItem(name=names["chiitoitsu"], fu=25)]
    if yaku_result.has(Yaku.pinfu) and context.win_type == WinType.tsumo:
        return 20, [FuBreakdownItem(name=names["base"], fu=20)]

    details = [FuBreakdownItem(name=names["base"], fu=20)]
    if context.win_type == WinType.tsumo:
        details.append(FuBreakdownItem(name=names["tsumo"], fu=2))
    elif decomposition.is_closed:
        details.append(FuBreakdownItem(name=names["closed_ron"], fu=10))

    for group in decomposition.pairs:
        pair_fu = _pair_fu(group.first, context, rules)
        if pair_fu:
            details.append(FuBreakdownItem(name=names["pair"], fu=pair_fu))

    if wait_shape(decomposition, context.win_index) in _WAIT_FU_SHAPES:
        details.append(FuBreakdownItem(name=names["wait"], fu=2))

    for index, group in enumerate(decomposition.groups):
        if group.type != GroupType.triplet:
            continue
        # a triplet finished by ron is scored as open; quads never complete a hand
        ron_completed = context.win_type == WinType.ron and index == decomposition.wait_index and not group.kan
        details.append(FuBreakdownItem(name=names["meld"], fu=_meld_fu(group, group.open or ron_completed)))

    total = sum(item.fu for item in details)
    rounded = ((total + 9) // 10) * 10
    if rounded == 20 and not decomposition.is_closed:
        rounded = 30
    if rounded > total:
        details.append(FuBreakdownItem(name=names["round_up"], fu=rounded - total))
    return rounded, details
