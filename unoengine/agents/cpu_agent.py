"""Deterministic CPU strategy and the agent that plays it."""

from collections import Counter
from dataclasses import dataclass
from typing import Optional, Sequence

from unoengine.engine import (
    CONCRETE_COLORS,
    Action,
    Card,
    CardKind,
    ChooseColor,
    Color,
    DrawCard,
    PassTurn,
    PlayCard,
    PlayerView,
    TurnPhase,
)


@dataclass(frozen=True)
class CpuMove:
    """What the CPU wants to do: play ``hand_index`` (naming ``color`` for a wild) or draw."""

    hand_index: Optional[int] = None
    color: Optional[Color] = None

    @property
    def must_draw(self) -> bool:
        return self.hand_index is None


def _is_playable(
    hand: Sequence[Card],
    index: int,
    top: Card,
    current_color: Color,
    pending_draw_two: int,
    pending_draw_four: int,
) -> bool:
    card = hand[index]
    if pending_draw_two:
        return card.kind is CardKind.DRAW_TWO
    if pending_draw_four:
        return card.kind is CardKind.WILD_DRAW_FOUR
    if not card.can_follow(top, current_color):
        return False
    if card.kind is CardKind.WILD_DRAW_FOUR:
        return not any(
            other.color == current_color for i, other in enumerate(hand) if i != index
        )
    return True


def choose_color(hand: Sequence[Card]) -> Color:
    """Most common color in ``hand``; ties and empty hands go by Red, Yellow, Green, Blue."""
    counts = Counter(card.color for card in hand if card.color.is_concrete)
    best = CONCRETE_COLORS[0]
    for color in CONCRETE_COLORS:
        if counts[color] > counts[best]:
            best = color
    return best


def choose_move(
    hand: Sequence[Card],
    top: Card,
    current_color: Color,
    pending_draw_two: int = 0,
    pending_draw_four: int = 0,
) -> CpuMove:
    """Pick the first legal card in hand order, or draw if there is none."""
    for index in range(len(hand)):
        if _is_playable(hand, index, top, current_color, pending_draw_two, pending_draw_four):
            card = hand[index]
            if card.is_wild:
                remaining = [c for i, c in enumerate(hand) if i != index]
                return CpuMove(index, choose_color(remaining))
            return CpuMove(index)
    return CpuMove()


class CpuAgent:
    """Agent that plays the deterministic CPU strategy."""

    def __init__(self, name: str = "cpu"):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        player_index: int,
    ) -> Action | None:
        if not legal_actions:
            return None

        if player_view.phase is TurnPhase.AWAITING_COLOR_CHOICE:
            return ChooseColor(choose_color(player_view.my_hand))

        move = choose_move(
            player_view.my_hand,
            player_view.top_discard,
            player_view.current_color,
            player_view.pending_draw_two,
            player_view.pending_draw_four,
        )
        if not move.must_draw:
            return PlayCard(move.hand_index)
        for a in legal_actions:
            if isinstance(a, (DrawCard, PassTurn)):
                return a
        return None

    def wants_to_declare_safety(self, player_view: PlayerView) -> bool:
        return True
