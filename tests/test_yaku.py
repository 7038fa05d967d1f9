import pytest

from riichi_core.errors import IncompleteHand, NoYaku
from riichi_core.names import Yaku
from riichi_core.schemas import Context, Decomposition, Group, RuleSet, ShapeFamily
from riichi_core.tiles import tile_to_index
from riichi_core.yaku import EXCLUSIONS, evaluate_yaku, is_complete_decomposition, wait_shape


def t(code: str) -> int:
    return tile_to_index(code)


def standard(*groups: Group, wait_index: int | None = None) -> Decomposition:
    return Decomposition(family=ShapeFamily.standard, groups=groups, wait_index=wait_index)


def base_context(**kwargs) -> Context:
    payload = {"win_type": "ron", "round_wind": "E", "seat_wind": "S"}
    payload.update(kwargs)
    return Context.model_validate(payload)


def test_wait_shapes():
    hand = standard(
        Group.sequence(t("1m")),
        Group.sequence(t("7p")),
        Group.sequence(t("3s")),
        Group.triplet(t("E")),
        Group.pair(t("9s")),
    )
    assert wait_shape(hand.model_copy(update={"wait_index": 0}), t("3m")) == "penchan"
    assert wait_shape(hand.model_copy(update={"wait_index": 0}), t("1m")) == "ryanmen"
    assert wait_shape(hand.model_copy(update={"wait_index": 1}), t("7p")) == "penchan"
    assert wait_shape(hand.model_copy(update={"wait_index": 2}), t("4s")) == "kanchan"
    assert wait_shape(hand.model_copy(update={"wait_index": 3}), t("E")) == "shanpon"
    assert wait_shape(hand.model_copy(update={"wait_index": 4}), t("9s")) == "tanki"
    assert wait_shape(hand, t("9s")) == ""


def test_pinfu_requires_two_sided_wait():
    groups = (
        Group.sequence(t("2m")),
        Group.sequence(t("5m")),
        Group.sequence(t("3p")),
        Group.sequence(t("6s")),
        Group.pair(t("5p")),
    )
    ryanmen = evaluate_yaku(standard(*groups, wait_index=0), base_context(win_tile="2m"))
    assert set(ryanmen.keys) == {Yaku.pinfu, Yaku.tanyao}

    kanchan = evaluate_yaku(standard(*groups, wait_index=0), base_context(win_tile="3m"))
    assert kanchan.keys == [Yaku.tanyao]


def test_pinfu_rejects_value_pair():
    groups = (
        Group.sequence(t("1m")),
        Group.sequence(t("4m")),
        Group.sequence(t("3p")),
        Group.sequence(t("6s")),
        Group.pair(t("S")),
    )
    with pytest.raises(NoYaku):
        evaluate_yaku(standard(*groups, wait_index=1), base_context(win_tile="4m"))


def test_pinfu_unknown_wait_is_not_awarded():
    groups = (
        Group.sequence(t("2m")),
        Group.sequence(t("5m")),
        Group.sequence(t("3p")),
        Group.sequence(t("6s")),
        Group.pair(t("5p")),
    )
    result = evaluate_yaku(standard(*groups), base_context())
    assert result.keys == [Yaku.tanyao]


def test_open_hand_han_reduction():
    groups = (
        Group.sequence(t("1p"), open=True),
        Group.sequence(t("4p")),
        Group.sequence(t("7p")),
        Group.triplet(t("N")),
        Group.pair(t("P")),
    )
    result = evaluate_yaku(standard(*groups), base_context())
    han = {item.key: item.han for item in result.yaku}
    assert han == {Yaku.ittsu: 1, Yaku.honitsu: 2}
    assert result.yaku_han == 3


def test_closed_only_yaku_need_closed_hand():
    groups = (
        Group.sequence(t("2m"), open=True),
        Group.sequence(t("2m")),
        Group.sequence(t("3p")),
        Group.sequence(t("6s")),
        Group.pair(t("5p")),
    )
    result = evaluate_yaku(standard(*groups), base_context(win_type="tsumo", riichi=False))
    assert result.keys == [Yaku.tanyao]


def test_exclusions_drop_weaker_yaku():
    groups = (
        Group.sequence(t("1m")),
        Group.sequence(t("1m")),
        Group.sequence(t("7p")),
        Group.sequence(t("7p")),
        Group.pair(t("9s")),
    )
    result = evaluate_yaku(standard(*groups), base_context(double_riichi=True))
    keys = set(result.keys)
    assert {Yaku.double_riichi, Yaku.ryanpeikou, Yaku.junchan} <= keys
    assert not keys & {Yaku.riichi, Yaku.iipeikou, Yaku.chanta}
    for winner, loser in EXCLUSIONS:
        assert not (winner in keys and loser in keys)


def test_chanta_requires_honor_and_sequence():
    groups = (
        Group.sequence(t("1m")),
        Group.sequence(t("7m")),
        Group.triplet(t("9p")),
        Group.triplet(t("W")),
        Group.pair(t("1s")),
    )
    result = evaluate_yaku(standard(*groups), base_context(riichi=True))
    assert result.has(Yaku.chanta)
    assert result.has(Yaku.riichi)


def test_sanshoku_and_sankantsu():
    groups = (
        Group.sequence(t("3m")),
        Group.sequence(t("3p"), open=True),
        Group.sequence(t("3s")),
        Group.triplet(t("8m")),
        Group.pair(t("5s")),
    )
    result = evaluate_yaku(standard(*groups), base_context())
    assert {item.key: item.han for item in result.yaku} == {Yaku.sanshoku_doujun: 1, Yaku.tanyao: 1}

    kans = standard(
        Group.triplet(t("2m"), kan=True),
        Group.triplet(t("4p"), open=True, kan=True),
        Group.triplet(t("6s"), kan=True),
        Group.sequence(t("3s")),
        Group.pair(t("8m")),
    )
    result = evaluate_yaku(kans, base_context(win_type="tsumo", rinshan=True))
    assert {Yaku.sankantsu, Yaku.rinshan, Yaku.tanyao} <= set(result.keys)


def test_shousangen():
    groups = (
        Group.triplet(t("P")),
        Group.triplet(t("F")),
        Group.sequence(t("2m")),
        Group.sequence(t("6m")),
        Group.pair(t("C")),
    )
    result = evaluate_yaku(standard(*groups), base_context())
    assert {Yaku.shousangen, Yaku.haku, Yaku.hatsu} <= set(result.keys)


def test_situational_yaku():
    groups = (
        Group.sequence(t("2m")),
        Group.sequence(t("5m")),
        Group.sequence(t("3p")),
        Group.sequence(t("6s")),
        Group.pair(t("5p")),
    )
    houtei = evaluate_yaku(standard(*groups), base_context(houtei=True))
    assert houtei.has(Yaku.houtei)
    haitei = evaluate_yaku(standard(*groups), base_context(win_type="tsumo", haitei=True))
    assert {Yaku.haitei, Yaku.menzen_tsumo} <= set(haitei.keys)


def test_yakuman_overrides_ordinary_yaku_and_dora():
    groups = (
        Group.triplet(t("E")),
        Group.triplet(t("S")),
        Group.triplet(t("W"), open=True),
        Group.triplet(t("N"), open=True),
        Group.pair(t("P")),
    )
    context = base_context(dora_indicators=("C",))
    result = evaluate_yaku(standard(*groups), context, RuleSet(double_yakuman_ari=True))
    assert set(result.keys) == {Yaku.daisuushii, Yaku.tsuuiisou}
    assert result.yakuman_multiplier == 3
    assert result.dora.total == 0
    assert all(item.yakuman for item in result.yaku)


def test_shousuushii():
    groups = (
        Group.triplet(t("E")),
        Group.triplet(t("S")),
        Group.triplet(t("W"), open=True),
        Group.sequence(t("1m")),
        Group.pair(t("N")),
    )
    result = evaluate_yaku(standard(*groups), base_context())
    assert result.keys == [Yaku.shousuushii]
    assert result.yakuman_multiplier == 1


def test_chinroutou_and_suukantsu():
    groups = (
        Group.triplet(t("1m"), kan=True),
        Group.triplet(t("9m"), open=True, kan=True),
        Group.triplet(t("1p"), open=True, kan=True),
        Group.triplet(t("9s"), open=True, kan=True),
        Group.pair(t("1s")),
    )
    result = evaluate_yaku(standard(*groups, wait_index=4), base_context(win_tile="1s"))
    assert {Yaku.chinroutou, Yaku.suukantsu} <= set(result.keys)
    assert Yaku.suuankou not in result.keys


def test_tenhou_and_chiihou():
    groups = (
        Group.sequence(t("2m")),
        Group.sequence(t("5m")),
        Group.sequence(t("3p")),
        Group.sequence(t("6s")),
        Group.pair(t("5p")),
    )
    dealer = base_context(win_type="tsumo", seat_wind="E", tenhou=True)
    assert evaluate_yaku(standard(*groups), dealer).keys == [Yaku.tenhou]
    other = base_context(win_type="tsumo", chiihou=True)
    assert evaluate_yaku(standard(*groups), other).keys == [Yaku.chiihou]


def test_dora_counted_on_calls():
    groups = (
        Group.triplet(t("5m"), open=True),
        Group.sequence(t("3p")),
        Group.sequence(t("6s")),
        Group.triplet(t("C")),
        Group.pair(t("8p")),
    )
    result = evaluate_yaku(standard(*groups), base_context(dora_indicators=("4m",), aka_dora_count=1))
    assert result.dora.dora == 3
    assert result.dora.aka_dora == 1
    assert result.han == 1 + 4


def test_no_yaku_raises():
    groups = (
        Group.sequence(t("1m")),
        Group.sequence(t("4p")),
        Group.sequence(t("7s")),
        Group.triplet(t("N")),
        Group.pair(t("2p")),
    )
    with pytest.raises(NoYaku):
        evaluate_yaku(standard(*groups), base_context(dora_indicators=("1p",)))


def test_incomplete_decomposition_rejected():
    groups = (Group.sequence(t("1m")), Group.sequence(t("4p")), Group.pair(t("2p")))
    decomposition = standard(*groups)
    assert not is_complete_decomposition(decomposition)
    with pytest.raises(IncompleteHand):
        evaluate_yaku(decomposition, base_context(riichi=True))


def test_seven_pairs_not_double_counted():
    pairs = tuple(Group.pair(t(code)) for code in ("2m", "4m", "6m", "3p", "5p", "7s", "8s"))
    decomposition = Decomposition(family=ShapeFamily.seven_pairs, groups=pairs, wait_index=0)
    result = evaluate_yaku(decomposition, base_context(win_tile="2m"))
    assert set(result.keys) == {Yaku.chiitoitsu, Yaku.tanyao}


def test_english_display_names():
    groups = (
        Group.sequence(t("1p"), open=True),
        Group.sequence(t("4p")),
        Group.sequence(t("7p")),
        Group.triplet(t("S")),
        Group.pair(t("P")),
    )
    result = evaluate_yaku(standard(*groups), base_context(), RuleSet(display_lang="en"))
    names = {item.key: item.name for item in result.yaku}
    assert names[Yaku.ittsu] == "Straight (Open)"
    assert names[Yaku.seat_wind] == "Honor Tiles (Players Wind: South)"
