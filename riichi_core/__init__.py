from riichi_core.config import Settings, configure_logging, settings
from riichi_core.errors import IncompleteHand, InvalidContext, InvalidHand, MahjongError, NoYaku
from riichi_core.hand_scoring import evaluate_hand, score_hand
from riichi_core.names import Yaku
from riichi_core.schemas import (
    Context,
    Decomposition,
    Group,
    RuleSet,
    Score,
    ShantenResult,
    TileCounts,
    Wind,
    WinType,
    YakuResult,
)
from riichi_core.scoring import score
from riichi_core.shanten import discard_shanten, shanten, waits
from riichi_core.tiles import TileKind
from riichi_core.yaku import evaluate_yaku

__all__ = [
    "Context",
    "Decomposition",
    "Group",
    "IncompleteHand",
    "InvalidContext",
    "InvalidHand",
    "MahjongError",
    "NoYaku",
    "RuleSet",
    "Score",
    "Settings",
    "ShantenResult",
    "TileCounts",
    "TileKind",
    "WinType",
    "Wind",
    "Yaku",
    "YakuResult",
    "configure_logging",
    "discard_shanten",
    "evaluate_hand",
    "evaluate_yaku",
    "score",
    "score_hand",
    "settings",
    "shanten",
    "waits",
]
