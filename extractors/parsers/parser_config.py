# extractors/parsers/parser_config.py
"""
Configuration module for page parser settings.
Layout-era differences are expressed here as data, not as code paths.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from exceptions import ConfigurationError


@dataclass(frozen=True)
class IconVariant:
    """
    Colour conventions of one generation of the events timeline.

    Attributes:
        name: Variant key used in configuration
        yellow_colours: Fill colours marking a yellow card
        substitution_colours: Stroke pair that together mark a substitution
        red_colours: Colours marking a red card when no substitution pair matched
        multi_player_substitution: Treat any event naming 2+ players as a substitution
    """

    name: str
    yellow_colours: Tuple[str, ...]
    substitution_colours: Optional[Tuple[str, str]] = None
    red_colours: Tuple[str, ...] = ()
    multi_player_substitution: bool = False


class ParserConfig:
    """
    Configuration class containing parser constants and variant tables.
    """

    ICON_VARIANTS: Dict[str, IconVariant] = {
        # ***> in/out arrows drawn green + red inside one svg <***
        "current": IconVariant(
            name="current",
            yellow_colours=("FAC83C",),
            substitution_colours=("1A7941", "DD3636"),
        ),
        # ***> earlier pages: red stroke alone is a card, two names a sub <***
        "legacy": IconVariant(
            name="legacy",
            yellow_colours=("FAC83C",),
            red_colours=("DD3636",),
            multi_player_substitution=True,
        ),
    }

    # ***> (event type, keywords) checked in order against title/alt hints <***
    KEYWORD_HINTS: List[Tuple[str, Tuple[str, ...]]] = [
        ("own_goal", ("sjálfsmark", "sjalfsmark", "own goal")),
        ("penalty", ("víti", "viti", "penalty")),
        ("goal", ("mark", "goal")),
        ("second_yellow", ("seinna gult", "second yellow")),
        ("yellow", ("gult", "yellow")),
        ("red", ("rautt", "red card")),
    ]

    @classmethod
    def get_icon_variants(cls, names: Iterable[str]) -> List[IconVariant]:
        """
        Resolve configured variant names in order.

        Raises:
            ConfigurationError: If a name is not a known variant
        """
        variants = []
        for name in names:
            if name not in cls.ICON_VARIANTS:
                raise ConfigurationError(
                    f"Unknown icon variant '{name}', "
                    f"expected one of {sorted(cls.ICON_VARIANTS)}"
                )
            variants.append(cls.ICON_VARIANTS[name])
        return variants
