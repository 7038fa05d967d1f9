from __future__ import annotations

from collections.abc import Sequence

import structlog

from riichi_core.errors import IncompleteHand, NoYaku
from riichi_core.fu import calculate_fu
from riichi_core.schemas import Context, Decomposition, Group, RuleSet, Score, TileCounts, YakuResult
from riichi_core.scoring import score
from riichi_core.shanten import shanten
from riichi_core.validators import validate_context, validate_win_tile
from riichi_core.yaku import evaluate_yaku, is_complete_decomposition

logger = structlog.get_logger()


def resolve_waits(decomposition: Decomposition, win_tile: int | None) -> list[Decomposition]:
    """One variant per concealed group the winning tile could have completed."""
    if win_tile is None:
        return [decomposition]
    variants: list[Decomposition] = []
    seen: set[Group] = set()
    for index, group in enumerate(decomposition.groups):
        if group.open or group.kan or win_tile not in group.tiles or group in seen:
            continue
        seen.add(group)
        variants.append(decomposition.model_copy(update={"wait_index": index}))
    return variants or [decomposition]


def evaluate_hand(
    hand: TileCounts,
    context: Context,
    calls: Sequence[Group] = (),
    rules: RuleSet | None = None,
) -> tuple[Decomposition, YakuResult]:
    """Pick the reading of a complete hand worth the most han, then the most fu.

    A yakuman reading outranks every ordinary reading, whatever its dora. With
    ``rules.tie_break == "first"`` fu is ignored and the first reading that
    reaches the maximum han wins.
    """
    rules = rules or RuleSet()
    validate_context(context)
    validate_win_tile(hand.counts, context)

    result = shanten(hand, calls)
    if not result.is_complete:
        raise IncompleteHand(f"Hand is not complete (shanten {result.shanten})", shanten=result.shanten)

    candidates = [d for d in result.decompositions if is_complete_decomposition(d)]
    if not candidates:
        raise IncompleteHand("Hand has no complete four-meld reading", shanten=result.shanten)

    best: tuple[tuple[int, int, int], Decomposition, YakuResult] | None = None
    for decomposition in candidates:
        for variant in resolve_waits(decomposition, context.win_index):
            try:
                yaku_result = evaluate_yaku(variant, context, rules)
            except NoYaku:
                continue
            fu = calculate_fu(variant, context, rules, yaku_result)[0] if rules.tie_break == "fu" else 0
            rank = (yaku_result.yakuman_multiplier, yaku_result.han, fu)
            if best is None or rank > best[0]:
                best = (rank, variant, yaku_result)

    if best is None:
        raise NoYaku("No yaku: dora-only hands cannot win")

    logger.debug(
        "hand evaluated",
        family=best[1].family.value,
        han=best[2].han,
        candidates=len(candidates),
    )
    return best[1], best[2]


def score_hand(
    hand: TileCounts,
    context: Context,
    calls: Sequence[Group] = (),
    rules: RuleSet | None = None,
) -> Score:
    """Hand shape -> score."""
    rules = rules or RuleSet()
    decomposition, yaku_result = evaluate_hand(hand, context, calls, rules)
    return score(yaku_result, decomposition, context, rules)
