"""Deck creation, shuffling and the draw pile."""

import logging
import random
from typing import Iterable, List, Optional, Sequence

from unoengine.engine.card import CONCRETE_COLORS, Card, CardKind, Color
from unoengine.engine.errors import ReshuffleImpossible

logger = logging.getLogger(__name__)

ACTION_KINDS = (CardKind.SKIP, CardKind.REVERSE, CardKind.DRAW_TWO)


def create_deck(seed: int | None = None, shuffle: bool = True) -> List[Card]:
    """Create a standard 108-card UNO deck.

    - 4 colors × (0-9, Skip, Reverse, Draw Two): 76 cards
    - 4 Wild, 4 Wild Draw Four: 8 cards
    - Total: 108 cards
    """
    cards: List[Card] = []

    for color in CONCRETE_COLORS:
        # One zero per color
        cards.append(Card(color, CardKind.NUMBER, 0))
        # Two of each 1-9 and action cards per color
        for value in range(1, 10):
            cards.append(Card(color, CardKind.NUMBER, value))
            cards.append(Card(color, CardKind.NUMBER, value))
        for kind in ACTION_KINDS:
            cards.append(Card(color, kind))
            cards.append(Card(color, kind))

    for _ in range(4):
        cards.append(Card(Color.WILD, CardKind.WILD))
        cards.append(Card(Color.WILD, CardKind.WILD_DRAW_FOUR))

    if shuffle:
        random.Random(seed).shuffle(cards)

    return cards


class Deck:
    """The draw pile. Cards are drawn from the end of the list."""

    def __init__(self, seed: int | None = None, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random(seed)
        self._cards: List[Card] = create_deck(shuffle=False)
        self._rng.shuffle(self._cards)

    @classmethod
    def from_cards(cls, cards: Iterable[Card], seed: int | None = None) -> "Deck":
        """Build a deck with a fixed order; the last card is drawn first."""
        deck = cls.__new__(cls)
        deck._rng = random.Random(seed)
        deck._cards = list(cards)
        return deck

    def __len__(self) -> int:
        return len(self._cards)

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    def draw(self) -> Optional[Card]:
        """Remove and return the top card, or None when the pile is empty."""
        if not self._cards:
            return None
        return self._cards.pop()

    def put_bottom(self, card: Card) -> None:
        self._cards.insert(0, card)

    def reshuffle(self, discard_except_top: Sequence[Card]) -> None:
        """Take back every discarded card but the top one and shuffle them in."""
        if not discard_except_top:
            raise ReshuffleImpossible("Discard pile holds only its top card")
        self._cards.extend(discard_except_top)
        self._rng.shuffle(self._cards)
        logger.info("Reshuffled %d discarded cards into the draw pile", len(discard_except_top))
