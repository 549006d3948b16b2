"""Commands a player can issue, and the outcomes the engine returns."""

from dataclasses import dataclass
from typing import Union

from unoengine.engine.card import Card, Color


@dataclass
class PlayCard:
    """Action: play the card at ``hand_index``."""

    hand_index: int


@dataclass
class DrawCard:
    """Action: draw one card, or take the whole pending draw stack."""

    pass


@dataclass
class ChooseColor:
    """Action: name the color for the wild just played."""

    color: Color


@dataclass
class PassTurn:
    """Action: keep a playable drawn card and end the turn."""

    pass


@dataclass
class DeclareSafety:
    """Action: call out holding a single card."""

    pass


Action = Union[PlayCard, DrawCard, ChooseColor, PassTurn, DeclareSafety]


@dataclass(frozen=True)
class Played:
    card: Card


@dataclass(frozen=True)
class RequiresColorChoice:
    card: Card


@dataclass(frozen=True)
class DrewOne:
    """A single card was drawn. If ``playable``, the turn is still open."""

    card: Card
    playable: bool


@dataclass(frozen=True)
class ForcedDraw:
    count: int


@dataclass(frozen=True)
class ColorChosen:
    color: Color


@dataclass(frozen=True)
class TurnPassed:
    pass


@dataclass(frozen=True)
class SafetyDeclared:
    pass


@dataclass(frozen=True)
class PenaltyApplied:
    count: int


@dataclass(frozen=True)
class NoPenalty:
    pass


Outcome = Union[
    Played,
    RequiresColorChoice,
    DrewOne,
    ForcedDraw,
    ColorChosen,
    TurnPassed,
    SafetyDeclared,
]
