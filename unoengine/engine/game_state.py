"""Turn phases and the read-only view handed to players and transports."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from unoengine.engine.card import Card, Color

if TYPE_CHECKING:
    from unoengine.engine.rules import TurnEngine


class Direction(int, Enum):
    CLOCKWISE = 1
    COUNTER_CLOCKWISE = -1

    def flipped(self) -> "Direction":
        return Direction(-self.value)


class TurnPhase(str, Enum):
    AWAITING_MOVE = "awaiting_move"
    AWAITING_DRAW_TWO_RESOLUTION = "awaiting_draw_two_resolution"
    AWAITING_DRAW_FOUR_RESOLUTION = "awaiting_draw_four_resolution"
    AWAITING_COLOR_CHOICE = "awaiting_color_choice"
    GAME_OVER = "game_over"


@dataclass
class PlayerView:
    """Game state visible to a single player.

    Contains only that player's hand plus public information.
    """

    player_index: int
    my_hand: List[Card]
    top_discard: Card
    current_player: int
    current_color: Color
    direction: Direction
    phase: TurnPhase
    pending_draw_two: int
    pending_draw_four: int
    winner: Optional[int]
    player_ids: tuple[str, ...]
    num_cards_per_player: List[int]
    safety_declared: List[bool]
    draw_pile_size: int
    history: List[str]  # Recent game events

    @classmethod
    def from_engine(cls, engine: "TurnEngine", player_index: int) -> "PlayerView":
        """Create a player view, hiding other players' hands."""
        players = engine.players
        return cls(
            player_index=player_index,
            my_hand=list(engine.seat(player_index).hand.cards),
            top_discard=engine.top_card,
            current_player=engine.current_player_index,
            current_color=engine.current_color,
            direction=engine.direction,
            phase=engine.phase,
            pending_draw_two=engine.pending_draw_two,
            pending_draw_four=engine.pending_draw_four,
            winner=engine.winner_index,
            player_ids=tuple(p.player_id for p in players),
            num_cards_per_player=[p.hand_size for p in players],
            safety_declared=[p.has_declared_safety for p in players],
            draw_pile_size=engine.draw_pile_size,
            history=list(engine.history[-10:]),  # Last 10 events
        )

    @property
    def pending_draws(self) -> int:
        return self.pending_draw_two + self.pending_draw_four

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form for a transport layer."""
        return {
            "player_index": self.player_index,
            "my_hand": [c.to_dict() for c in self.my_hand],
            "top_discard": self.top_discard.to_dict(),
            "current_player": self.current_player,
            "current_color": self.current_color.value,
            "clockwise": self.direction is Direction.CLOCKWISE,
            "phase": self.phase.value,
            "pending_draw_two": self.pending_draw_two,
            "pending_draw_four": self.pending_draw_four,
            "winner": self.winner,
            "player_ids": list(self.player_ids),
            "num_cards_per_player": list(self.num_cards_per_player),
            "safety_declared": list(self.safety_declared),
            "draw_pile_size": self.draw_pile_size,
            "history": list(self.history),
        }
