from __future__ import annotations

from enum import Enum
from typing import Literal

DisplayLang = Literal["ja", "en"]


class Yaku(str, Enum):
    riichi = "riichi"
    double_riichi = "double_riichi"
    ippatsu = "ippatsu"
    menzen_tsumo = "menzen_tsumo"
    pinfu = "pinfu"
    tanyao = "tanyao"
    iipeikou = "iipeikou"
    haku = "haku"
    hatsu = "hatsu"
    chun = "chun"
    seat_wind = "seat_wind"
    round_wind = "round_wind"
    haitei = "haitei"
    houtei = "houtei"
    rinshan = "rinshan"
    chankan = "chankan"
    chiitoitsu = "chiitoitsu"
    chanta = "chanta"
    ittsu = "ittsu"
    sanshoku_doujun = "sanshoku_doujun"
    sanshoku_doukou = "sanshoku_doukou"
    toitoi = "toitoi"
    sanankou = "sanankou"
    sankantsu = "sankantsu"
    shousangen = "shousangen"
    honroutou = "honroutou"
    honitsu = "honitsu"
    junchan = "junchan"
    ryanpeikou = "ryanpeikou"
    chinitsu = "chinitsu"
    kokushi = "kokushi"
    kokushi_13 = "kokushi_13"
    suuankou = "suuankou"
    suuankou_tanki = "suuankou_tanki"
    daisangen = "daisangen"
    shousuushii = "shousuushii"
    daisuushii = "daisuushii"
    tsuuiisou = "tsuuiisou"
    ryuuiisou = "ryuuiisou"
    chinroutou = "chinroutou"
    suukantsu = "suukantsu"
    chuuren = "chuuren"
    junsei_chuuren = "junsei_chuuren"
    tenhou = "tenhou"
    chiihou = "chiihou"


JA_NAMES: dict[Yaku, str] = {
    Yaku.riichi: "立直",
    Yaku.double_riichi: "ダブル立直",
    Yaku.ippatsu: "一発",
    Yaku.menzen_tsumo: "門前清自摸和",
    Yaku.pinfu: "平和",
    Yaku.tanyao: "断么九",
    Yaku.iipeikou: "一盃口",
    Yaku.haku: "役牌 白",
    Yaku.hatsu: "役牌 發",
    Yaku.chun: "役牌 中",
    Yaku.seat_wind: "自風",
    Yaku.round_wind: "場風",
    Yaku.haitei: "海底摸月",
    Yaku.houtei: "河底撈魚",
    Yaku.rinshan: "嶺上開花",
    Yaku.chankan: "槍槓",
    Yaku.chiitoitsu: "七対子",
    Yaku.chanta: "混全帯么九",
    Yaku.ittsu: "一気通貫",
    Yaku.sanshoku_doujun: "三色同順",
    Yaku.sanshoku_doukou: "三色同刻",
    Yaku.toitoi: "対々和",
    Yaku.sanankou: "三暗刻",
    Yaku.sankantsu: "三槓子",
    Yaku.shousangen: "小三元",
    Yaku.honroutou: "混老頭",
    Yaku.honitsu: "混一色",
    Yaku.junchan: "純全帯么九",
    Yaku.ryanpeikou: "二盃口",
    Yaku.chinitsu: "清一色",
    Yaku.kokushi: "国士無双",
    Yaku.kokushi_13: "国士無双十三面待ち",
    Yaku.suuankou: "四暗刻",
    Yaku.suuankou_tanki: "四暗刻単騎",
    Yaku.daisangen: "大三元",
    Yaku.shousuushii: "小四喜",
    Yaku.daisuushii: "大四喜",
    Yaku.tsuuiisou: "字一色",
    Yaku.ryuuiisou: "緑一色",
    Yaku.chinroutou: "清老頭",
    Yaku.suukantsu: "四槓子",
    Yaku.chuuren: "九蓮宝燈",
    Yaku.junsei_chuuren: "純正九蓮宝燈",
    Yaku.tenhou: "天和",
    Yaku.chiihou: "地和",
}

EN_NAMES: dict[Yaku, str] = {
    Yaku.riichi: "Ready Hand",
    Yaku.double_riichi: "Double Ready",
    Yaku.ippatsu: "One Shot",
    Yaku.menzen_tsumo: "Self Pick",
    Yaku.pinfu: "No Points Hand",
    Yaku.tanyao: "All Simples",
    Yaku.iipeikou: "One Set Of Identical Sequences",
    Yaku.haku: "Honor Tiles (White Dragon)",
    Yaku.hatsu: "Honor Tiles (Green Dragon)",
    Yaku.chun: "Honor Tiles (Red Dragon)",
    Yaku.seat_wind: "Honor Tiles (Players Wind)",
    Yaku.round_wind: "Honor Tiles (Prevailing Wind)",
    Yaku.haitei: "Last Tile From The Wall",
    Yaku.houtei: "Last Discard",
    Yaku.rinshan: "Dead Wall Draw",
    Yaku.chankan: "Robbing A Quad",
    Yaku.chiitoitsu: "Seven Pairs",
    Yaku.chanta: "Terminal Or Honor In Each Set",
    Yaku.ittsu: "Straight",
    Yaku.sanshoku_doujun: "Three Color Straight",
    Yaku.sanshoku_doukou: "Three Color Triplets",
    Yaku.toitoi: "All Triplet Hand",
    Yaku.sanankou: "Three Closed Triplets",
    Yaku.sankantsu: "Three Kans",
    Yaku.shousangen: "Little Three Dragons",
    Yaku.honroutou: "All Terminals And Honors",
    Yaku.honitsu: "Half Flush",
    Yaku.junchan: "Terminal In Each Set",
    Yaku.ryanpeikou: "Two Sets Of Identical Sequences",
    Yaku.chinitsu: "Flush",
    Yaku.kokushi: "Thirteen Orphans",
    Yaku.kokushi_13: "Thirteen Orphans (13-sided Wait)",
    Yaku.suuankou: "Four Concealed Triplets",
    Yaku.suuankou_tanki: "Four Concealed Triplets (Single Wait)",
    Yaku.daisangen: "Big Three Dragons",
    Yaku.shousuushii: "Little Four Winds",
    Yaku.daisuushii: "Big Four Winds",
    Yaku.tsuuiisou: "All Honors",
    Yaku.ryuuiisou: "All Green",
    Yaku.chinroutou: "All Terminals",
    Yaku.suukantsu: "Four Kans",
    Yaku.chuuren: "Nine Gates",
    Yaku.junsei_chuuren: "Pure Nine Gates",
    Yaku.tenhou: "Heavenly Hand",
    Yaku.chiihou: "Hand Of Earth",
}

_JA_WINDS = {"E": "東", "S": "南", "W": "西", "N": "北"}
_EN_WINDS = {"E": "East", "S": "South", "W": "West", "N": "North"}

_OPEN_SUFFIX = {"ja": "（鳴）", "en": " (Open)"}
_KUISAGARI = {Yaku.chanta, Yaku.ittsu, Yaku.sanshoku_doujun, Yaku.honitsu, Yaku.junchan, Yaku.chinitsu}


def yaku_name(yaku: Yaku, lang: DisplayLang = "ja", is_open: bool = False, wind: str | None = None) -> str:
    names = JA_NAMES if lang == "ja" else EN_NAMES
    name = names[yaku]
    if wind is not None and yaku in {Yaku.seat_wind, Yaku.round_wind}:
        if lang == "ja":
            name = f"{name} {_JA_WINDS[wind]}"
        else:
            name = f"{name[:-1]}: {_EN_WINDS[wind]})"
    if is_open and yaku in _KUISAGARI:
        name += _OPEN_SUFFIX[lang]
    return name
