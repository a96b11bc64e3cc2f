from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .phonology import RegressiveMode


VowelReduction = Literal["ikanye", "ekanye", "none"]
ShchaNotation = Literal["doubled-fricative", "fricative-affricate"]
PalatalNNotation = Literal["palatal", "diacritic"]


@dataclass(frozen=True)
class StyleConfig:
    name: str = "sung-russian"
    description: str = "Sung Russian (Grayson): ikanye, long щ, full regressive palatalization"
    vowel_reduction: VowelReduction = "ikanye"
    shcha_notation: ShchaNotation = "doubled-fricative"
    palatal_n_notation: PalatalNNotation = "palatal"
    regressive_palatalization: RegressiveMode = "full"


DEFAULT_STYLE = StyleConfig()

STYLE_PRESETS: dict[str, StyleConfig] = {
    s.name: s
    for s in (
        DEFAULT_STYLE,
        StyleConfig(
            name="modern-standard",
            description="Contemporary standard: ikanye, nʲ notation, partial regressive palatalization",
            palatal_n_notation="diacritic",
            regressive_palatalization="partial",
        ),
        StyleConfig(
            name="petersburg",
            description="St. Petersburg: ekanye, щ as ʃʲtʃʲ",
            vowel_reduction="ekanye",
            shcha_notation="fricative-affricate",
        ),
        StyleConfig(
            name="choir",
            description="Choral diction: no reduction of е/а/о, minimal regressive palatalization",
            vowel_reduction="none",
            regressive_palatalization="minimal",
        ),
    )
}


def get_style(name: str) -> StyleConfig:
    try:
        return STYLE_PRESETS[name]
    except KeyError:
        raise ValueError(f"Unknown style: {name} (expected one of: {', '.join(STYLE_PRESETS)})") from None


_SHCHA = {
    "doubled-fricative": (("ʃʲtʃʲ", "ʃʲʃʲ"),),
    "fricative-affricate": (("ʃʲʃʲ", "ʃʲtʃʲ"),),
}
_PALATAL_N = {
    "palatal": (("nʲ", "ɲ"),),
    "diacritic": (("ɲ", "nʲ"),),
}
_REDUCTION = {
    "ikanye": (),
    "ekanye": (("ɪ", "ɛ"),),
    "none": (("ɪ", "ɛ"), ("ʌ", "ɑ")),
}


def _substitute(ipa: str, pairs: tuple[tuple[str, str], ...]) -> str:
    for old, new in pairs:
        ipa = ipa.replace(old, new)
    return ipa


def convert_notation(ipa: str, style: StyleConfig) -> str:
    """
    Rewrite щ and palatal-n notation; safe to apply to IPA in either notation.
    """
    ipa = _substitute(ipa, _SHCHA[style.shcha_notation])
    return _substitute(ipa, _PALATAL_N[style.palatal_n_notation])


def apply_style(ipa: str, style: StyleConfig = DEFAULT_STYLE) -> str:
    """
    Style pass over freshly generated IPA: vowel-reduction scheme, then notation.
    """
    return convert_notation(_substitute(ipa, _REDUCTION[style.vowel_reduction]), style)
