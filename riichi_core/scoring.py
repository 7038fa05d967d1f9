from __future__ import annotations

import structlog

from riichi_core.errors import IncompleteHand
from riichi_core.fu import calculate_fu
from riichi_core.schemas import (
    Context,
    Decomposition,
    Payment,
    Payments,
    Points,
    RuleSet,
    Score,
    WinType,
    YakuResult,
)
from riichi_core.yaku import is_complete_decomposition

logger = structlog.get_logger()

MANGAN = 2000
YAKUMAN_BASE = 8000

_LIMIT_BASE = {
    "満貫": MANGAN,
    "跳満": 3000,
    "倍満": 4000,
    "三倍満": 6000,
    "数え役満": YAKUMAN_BASE,
}


def _round_up(points: int) -> int:
    return ((points + 99) // 100) * 100


def _yakuman_label(multiplier: int) -> str:
    if multiplier <= 1:
        return "役満"
    if multiplier == 2:
        return "ダブル役満"
    return f"{multiplier}倍役満"


def _point_label_from_han_fu(han: int, fu: int, rules: RuleSet) -> str:
    if han >= 13:
        return "数え役満" if rules.kazoe_yakuman_ari else "三倍満"
    if han >= 11:
        return "三倍満"
    if han >= 8:
        return "倍満"
    if han >= 6:
        return "跳満"
    if han == 5 or fu * 2 ** (han + 2) >= MANGAN:
        return "満貫"
    if rules.kiriage_mangan and ((han == 4 and fu == 30) or (han == 3 and fu == 60)):
        return "満貫"
    return "通常"


def _base_points(han: int, fu: int, rules: RuleSet) -> int:
    label = _point_label_from_han_fu(han, fu, rules)
    return _LIMIT_BASE.get(label, fu * 2 ** (han + 2))


def _calc_points(context: Context, base: int) -> tuple[Points, Payments, tuple[Payment, ...]]:
    kyotaku_bonus = context.kyotaku * 1000
    honba_bonus = context.honba * 300

    if context.win_type == WinType.ron:
        ron = _round_up(base * (6 if context.is_dealer else 4))
        transfers = (Payment(payer="discarder", amount=ron + honba_bonus),)
        points = Points(ron=ron)
        hand_points = ron
    elif context.is_dealer:
        each = _round_up(base * 2)
        transfers = tuple(Payment(payer="non_dealer", amount=each + context.honba * 100) for _ in range(3))
        points = Points(tsumo_dealer_pay=each, tsumo_non_dealer_pay=each)
        hand_points = each * 3
    else:
        pay_dealer = _round_up(base * 2)
        pay_non_dealer = _round_up(base)
        transfers = (
            Payment(payer="dealer", amount=pay_dealer + context.honba * 100),
            Payment(payer="non_dealer", amount=pay_non_dealer + context.honba * 100),
            Payment(payer="non_dealer", amount=pay_non_dealer + context.honba * 100),
        )
        points = Points(tsumo_dealer_pay=pay_dealer, tsumo_non_dealer_pay=pay_non_dealer)
        hand_points = pay_dealer + pay_non_dealer * 2

    payments = Payments(
        hand_points_received=hand_points,
        honba_bonus=honba_bonus,
        kyotaku_bonus=kyotaku_bonus,
        total_received=hand_points + honba_bonus + kyotaku_bonus,
    )
    return points, payments, transfers


def score(
    yaku_result: YakuResult,
    decomposition: Decomposition,
    context: Context,
    rules: RuleSet | None = None,
) -> Score:
    """Fu, han, limit label and payments for one evaluated decomposition."""
    rules = rules or RuleSet()
    if not is_complete_decomposition(decomposition):
        raise IncompleteHand("decomposition does not form a complete winning shape")

    if yaku_result.is_yakuman:
        multiplier = yaku_result.yakuman_multiplier
        base = YAKUMAN_BASE * multiplier
        points, payments, transfers = _calc_points(context, base)
        logger.debug("yakuman scored", multiplier=multiplier, total=payments.total_received)
        return Score(
            han=13 * multiplier,
            fu=0,
            base_points=base,
            point_label=_yakuman_label(multiplier),
            yakuman=tuple(item.name for item in yaku_result.yaku),
            points=points,
            payments=payments,
            transfers=transfers,
        )

    han = yaku_result.han
    fu, fu_breakdown = calculate_fu(decomposition, context, rules, yaku_result)
    base = _base_points(han, fu, rules)
    points, payments, transfers = _calc_points(context, base)
    logger.debug("hand scored", han=han, fu=fu, base=base, total=payments.total_received)
    return Score(
        han=han,
        fu=fu,
        base_points=base,
        point_label=_point_label_from_han_fu(han, fu, rules),
        yaku=yaku_result.yaku,
        dora=yaku_result.dora,
        fu_breakdown=tuple(fu_breakdown),
        points=points,
        payments=payments,
        transfers=transfers,
    )
