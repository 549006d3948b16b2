"""Players and their hands."""

from typing import List, Optional

from unoengine.engine.card import Card, Color


class Hand:
    """Cards held by one player, in the order they were received."""

    def __init__(self, cards: Optional[List[Card]] = None):
        self._cards: List[Card] = list(cards or [])
        self._safety_declared = False

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self):
        return iter(self._cards)

    def __getitem__(self, index: int) -> Card:
        return self._cards[index]

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    @property
    def safety_declared(self) -> bool:
        return self._safety_declared

    def declare_safety(self) -> bool:
        """Set the one-card call. Returns False unless exactly one card is held."""
        if len(self._cards) != 1:
            return False
        self._safety_declared = True
        return True

    def add(self, card: Card) -> None:
        # Any card received cancels a previous safety call.
        self._safety_declared = False
        self._cards.append(card)

    def remove_at(self, index: int) -> Card:
        if not 0 <= index < len(self._cards):
            raise IndexError(f"Hand index {index} out of range (hand size {len(self._cards)})")
        return self._cards.pop(index)


class Player:
    """A seat at the table: identity, hand, and whether a human is playing it."""

    def __init__(self, player_id: str, name: Optional[str] = None, is_human: bool = False):
        self.player_id = player_id
        self.name = name or player_id
        self.is_human = is_human
        self.hand = Hand()

    def __repr__(self) -> str:
        kind = "human" if self.is_human else "cpu"
        return f"Player({self.player_id!r}, {kind}, {len(self.hand)} cards)"

    @property
    def hand_size(self) -> int:
        return len(self.hand)

    @property
    def has_declared_safety(self) -> bool:
        return self.hand.safety_declared

    @property
    def has_won(self) -> bool:
        return len(self.hand) == 0

    def add_card(self, card: Card) -> None:
        self.hand.add(card)

    def remove_card_at(self, index: int) -> Card:
        return self.hand.remove_at(index)

    def has_any_legal_move(self, top: Card, active_color: Color) -> bool:
        return any(card.can_follow(top, active_color) for card in self.hand)

    def declare_safety(self) -> bool:
        """Mark the one-card call. Returns False unless exactly one card is held."""
        return self.hand.declare_safety()
