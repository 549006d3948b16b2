"""Card, Color and CardKind types for UNO."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Color(str, Enum):
    """Card colors. WILD only ever appears on Wild / Wild Draw Four cards."""

    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    WILD = "wild"

    @property
    def is_concrete(self) -> bool:
        return self is not Color.WILD


# Also the tie-break priority used when picking a color for a wild.
CONCRETE_COLORS = (Color.RED, Color.YELLOW, Color.GREEN, Color.BLUE)


class CardKind(str, Enum):
    """What a card does when played."""

    NUMBER = "number"
    SKIP = "skip"
    REVERSE = "reverse"
    DRAW_TWO = "draw_two"
    WILD = "wild"
    WILD_DRAW_FOUR = "wild_draw_four"

    @property
    def is_wild(self) -> bool:
        return self in (CardKind.WILD, CardKind.WILD_DRAW_FOUR)


@dataclass(frozen=True)
class Card:
    """A UNO card.

    Number cards carry a value 0-9; every other kind has value=None.
    Wild and Wild Draw Four cards are always Color.WILD, and nothing else is.
    Equality is structural, so the two copies of red 7 in a deck compare equal.
    """

    color: Color
    kind: CardKind
    value: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind is CardKind.NUMBER:
            if self.value is None or not 0 <= self.value <= 9:
                raise ValueError(f"Number card needs a value 0-9, got {self.value!r}")
        elif self.value is not None:
            raise ValueError(f"{self.kind.value} cards carry no value")
        if self.kind.is_wild and self.color is not Color.WILD:
            raise ValueError("Wild cards must have color=WILD")
        if not self.kind.is_wild and self.color is Color.WILD:
            raise ValueError("Non-wild cards must have a concrete color")

    @property
    def is_wild(self) -> bool:
        return self.kind.is_wild

    def can_follow(self, top: "Card", active_color: Color) -> bool:
        """Return True if this card may be played on ``top``.

        ``active_color`` is the color in force, which differs from
        ``top.color`` only when the top card is a wild.
        """
        if self.is_wild:
            return True
        if self.color == top.color:
            return True
        if top.color is Color.WILD and self.color == active_color:
            return True
        if self.kind is CardKind.NUMBER and top.kind is CardKind.NUMBER:
            return self.value == top.value
        return self.kind is not CardKind.NUMBER and self.kind == top.kind

    def to_dict(self) -> dict:
        return {"color": self.color.value, "kind": self.kind.value, "value": self.value}

    @classmethod
    def from_dict(cls, data: dict) -> "Card":
        return cls(
            color=Color(data["color"]),
            kind=CardKind(data["kind"]),
            value=data.get("value"),
        )

    def __str__(self) -> str:
        if self.kind is CardKind.NUMBER:
            return f"{self.color.value}_{self.value}"
        if self.is_wild:
            return self.kind.value
        return f"{self.color.value}_{self.kind.value}"


def number(color: Color, value: int) -> Card:
    return Card(color, CardKind.NUMBER, value)


def action(color: Color, kind: CardKind) -> Card:
    return Card(color, kind)


def wild(draw_four: bool = False) -> Card:
    return Card(Color.WILD, CardKind.WILD_DRAW_FOUR if draw_four else CardKind.WILD)
