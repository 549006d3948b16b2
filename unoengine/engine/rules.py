"""UNO rules: the turn engine, its legal moves and state transitions."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Union

from unoengine.engine.actions import (
    Action,
    ChooseColor,
    ColorChosen,
    DeclareSafety,
    DrawCard,
    DrewOne,
    ForcedDraw,
    NoPenalty,
    Outcome,
    PassTurn,
    PenaltyApplied,
    PlayCard,
    Played,
    RequiresColorChoice,
    SafetyDeclared,
    TurnPassed,
)
from unoengine.engine.card import CONCRETE_COLORS, Card, CardKind, Color
from unoengine.engine.deck import Deck
from unoengine.engine.errors import (
    AlreadyDrew,
    ColorChoicePending,
    DeckExhausted,
    GameAlreadyOver,
    IllegalPlay,
    InvalidCard,
    InvalidColor,
    InvalidSafetyDeclaration,
    MustResolveDrawStack,
    NoColorChoicePending,
    NothingToPass,
    NotYourTurn,
    ReshuffleImpossible,
    RuleViolation,
    WildDrawFourWhenAlternativeExists,
)
from unoengine.engine.game_state import Direction, PlayerView, TurnPhase
from unoengine.engine.player import Player

logger = logging.getLogger(__name__)

DEFAULT_HAND_SIZE = 7
SAFETY_PENALTY = 2


class TurnEngine:
    """Single authority over one match.

    Every command either applies completely or raises before touching state.
    Commands are synchronous and must be serialized by the caller.
    """

    def __init__(
        self,
        players: Sequence[Player],
        deck: Deck,
        discard_pile: Sequence[Card],
        current_color: Color,
        current_player: int = 0,
        direction: Direction = Direction.CLOCKWISE,
        pending_draw_two: int = 0,
        pending_draw_four: int = 0,
        awaiting_color: bool = False,
    ):
        if len(players) < 2:
            raise ValueError("A match needs at least two players")
        if not discard_pile:
            raise ValueError("Discard pile must hold a starting card")
        if not current_color.is_concrete:
            raise ValueError("current_color must be a concrete color")
        if pending_draw_two and pending_draw_four:
            raise ValueError("Only one kind of draw stack may be pending")
        if not 0 <= current_player < len(players):
            raise ValueError(f"current_player {current_player} out of range")

        self._players: List[Player] = list(players)
        self._deck = deck
        self._discard: List[Card] = list(discard_pile)
        self._current_color = current_color
        self._current = current_player
        self._direction = direction
        self._pending_draw_two = pending_draw_two
        self._pending_draw_four = pending_draw_four
        self._awaiting_color = awaiting_color
        # A wild turned up as the starting card is named by the first player,
        # who then keeps the turn.
        self._keep_turn_after_color = False
        self._drawn_pending = False
        self._winner: Optional[int] = None
        self._aborted = False
        self._history: List[str] = []

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def new_match(
        cls,
        players: Sequence[Union[Player, str]],
        seed: Optional[int] = None,
        hand_size: int = DEFAULT_HAND_SIZE,
        apply_starting_card_effect: bool = True,
        deck: Optional[Deck] = None,
    ) -> "TurnEngine":
        """Deal a fresh match: ``hand_size`` cards each, one card turned up."""
        seats = [p if isinstance(p, Player) else Player(p) for p in players]
        if len(seats) < 2:
            raise ValueError("A match needs at least two players")
        if deck is None:
            deck = Deck(seed=seed)
        if hand_size < 1 or hand_size * len(seats) >= len(deck) - 4:
            raise ValueError(f"Cannot deal {hand_size} cards to {len(seats)} players")

        for _ in range(hand_size):
            for player in seats:
                player.add_card(deck.draw())

        # A Wild Draw Four never starts the pile; send it to the bottom.
        first_card = deck.draw()
        while first_card.kind is CardKind.WILD_DRAW_FOUR:
            deck.put_bottom(first_card)
            first_card = deck.draw()

        color = first_card.color if first_card.color.is_concrete else CONCRETE_COLORS[0]
        engine = cls(seats, deck, [first_card], color)
        engine._record(f"Match started, {first_card} turned up")
        if apply_starting_card_effect:
            engine._apply_starting_effect(first_card)
        logger.info(
            "New match: %d players, starting card %s, first to act %s",
            len(seats),
            first_card,
            engine.current_player.player_id,
        )
        return engine

    @classmethod
    def single_player(
        cls,
        name: str,
        seed: Optional[int] = None,
        hand_size: int = DEFAULT_HAND_SIZE,
    ) -> "TurnEngine":
        """One human against three CPU players."""
        players = [Player("human", name=name, is_human=True)]
        players += [Player(f"cpu_{i}", name=f"CPU {i}") for i in range(1, 4)]
        return cls.new_match(players, seed=seed, hand_size=hand_size)

    @classmethod
    def from_position(
        cls,
        hands: Sequence[Sequence[Card]],
        discard_pile: Sequence[Card],
        draw_pile: Sequence[Card] = (),
        current_color: Optional[Color] = None,
        current_player: int = 0,
        direction: Direction = Direction.CLOCKWISE,
        pending_draw_two: int = 0,
        pending_draw_four: int = 0,
        player_ids: Optional[Sequence[str]] = None,
        seed: Optional[int] = None,
    ) -> "TurnEngine":
        """Rebuild an engine from an explicit table position.

        ``draw_pile`` is drawn from its end. ``current_color`` defaults to the
        top card's color.
        """
        ids = list(player_ids) if player_ids else [f"p{i}" for i in range(len(hands))]
        players = []
        for pid, cards in zip(ids, hands):
            player = Player(pid)
            for card in cards:
                player.add_card(card)
            players.append(player)
        if current_color is None:
            current_color = discard_pile[-1].color if discard_pile else Color.WILD
        return cls(
            players,
            Deck.from_cards(draw_pile, seed=seed),
            discard_pile,
            current_color,
            current_player=current_player,
            direction=direction,
            pending_draw_two=pending_draw_two,
            pending_draw_four=pending_draw_four,
        )

    def _apply_starting_effect(self, card: Card) -> None:
        kind = card.kind
        if kind is CardKind.NUMBER:
            return
        elif kind is CardKind.SKIP:
            self._advance()
        elif kind is CardKind.REVERSE:
            self._direction = self._direction.flipped()
            if len(self._players) == 2:
                self._advance()
        elif kind is CardKind.DRAW_TWO:
            self._pending_draw_two = 2
        elif kind is CardKind.WILD:
            self._awaiting_color = True
            self._keep_turn_after_color = True
        else:
            raise ValueError(f"Cannot start a match on {card}")

    # ------------------------------------------------------------------
    # Read-only queries
    # ------------------------------------------------------------------

    @property
    def players(self) -> tuple[Player, ...]:
        return tuple(self._players)

    @property
    def current_player_index(self) -> int:
        return self._current

    @property
    def current_player(self) -> Player:
        return self._players[self._current]

    @property
    def top_card(self) -> Card:
        return self._discard[-1]

    @property
    def discard_pile(self) -> tuple[Card, ...]:
        return tuple(self._discard)

    @property
    def draw_pile_size(self) -> int:
        return len(self._deck)

    @property
    def current_color(self) -> Color:
        return self._current_color

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def pending_draw_two(self) -> int:
        return self._pending_draw_two

    @property
    def pending_draw_four(self) -> int:
        return self._pending_draw_four

    @property
    def drawn_card_pending(self) -> bool:
        """True while the turn holder may play a just-drawn card or pass."""
        return self._drawn_pending

    @property
    def is_game_over(self) -> bool:
        return self._winner is not None

    @property
    def is_aborted(self) -> bool:
        return self._aborted

    @property
    def winner_index(self) -> Optional[int]:
        return self._winner

    @property
    def winner(self) -> Optional[Player]:
        return None if self._winner is None else self._players[self._winner]

    @property
    def history(self) -> tuple[str, ...]:
        return tuple(self._history)

    @property
    def phase(self) -> TurnPhase:
        if self._winner is not None:
            return TurnPhase.GAME_OVER
        if self._awaiting_color:
            return TurnPhase.AWAITING_COLOR_CHOICE
        if self._pending_draw_two:
            return TurnPhase.AWAITING_DRAW_TWO_RESOLUTION
        if self._pending_draw_four:
            return TurnPhase.AWAITING_DRAW_FOUR_RESOLUTION
        return TurnPhase.AWAITING_MOVE

    def view(self, player_index: int) -> PlayerView:
        return PlayerView.from_engine(self, player_index)

    def is_legal_play(self, player_index: int, hand_index: int) -> bool:
        """Would ``play_card(player_index, hand_index)`` be accepted right now?"""
        if self._aborted or self._winner is not None or self._awaiting_color:
            return False
        if player_index != self._current:
            return False
        player = self._players[player_index]
        if not 0 <= hand_index < player.hand_size:
            return False
        try:
            self._check_play(player, hand_index)
        except RuleViolation:
            return False
        return True

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def play_card(self, player_index: int, hand_index: int) -> Union[Played, RequiresColorChoice]:
        self._check_active()
        if self._awaiting_color:
            raise ColorChoicePending("Choose a color for the wild card first")
        player = self._turn_holder(player_index)
        if not 0 <= hand_index < player.hand_size:
            raise InvalidCard(f"No card at index {hand_index} (hand size {player.hand_size})")
        self._check_play(player, hand_index)

        card = player.remove_card_at(hand_index)
        self._discard.append(card)
        self._drawn_pending = False
        if not card.is_wild:
            self._current_color = card.color

        if player.has_won:
            self._winner = player_index
            self._record(f"{player.player_id} played {card} and WON!")
            logger.info("Match over: %s wins", player.player_id)
            return Played(card)

        self._record(f"{player.player_id} played {card}")
        return self._resolve_effect(card)

    def choose_color(self, player_index: int, color: Union[Color, str]) -> ColorChosen:
        self._check_active()
        if not self._awaiting_color:
            raise NoColorChoicePending("No wild card is waiting for a color")
        player = self._turn_holder(player_index)
        color = _coerce_color(color)

        self._current_color = color
        self._awaiting_color = False
        self._record(f"{player.player_id} chose {color.value}")
        if self._keep_turn_after_color:
            self._keep_turn_after_color = False
        else:
            self._advance()
        return ColorChosen(color)

    def draw_or_resolve_stack(self, player_index: int) -> Union[DrewOne, ForcedDraw]:
        self._check_active()
        if self._awaiting_color:
            raise ColorChoicePending("Choose a color for the wild card first")
        player = self._turn_holder(player_index)

        pending = self._pending_draw_two or self._pending_draw_four
        if pending:
            self._draw_into(player, pending)
            self._pending_draw_two = 0
            self._pending_draw_four = 0
            self._record(f"{player.player_id} drew {pending} cards (penalty)")
            self._advance()
            return ForcedDraw(pending)

        if self._drawn_pending:
            raise AlreadyDrew("Already drew this turn; play a card or pass")
        (card,) = self._draw_into(player, 1)
        self._record(f"{player.player_id} drew a card")
        if card.can_follow(self.top_card, self._current_color):
            self._drawn_pending = True
            return DrewOne(card, playable=True)
        self._advance()
        return DrewOne(card, playable=False)

    def pass_turn(self, player_index: int) -> TurnPassed:
        self._check_active()
        if self._awaiting_color:
            raise ColorChoicePending("Choose a color for the wild card first")
        player = self._turn_holder(player_index)
        if not self._drawn_pending:
            raise NothingToPass("Passing is only allowed after drawing a playable card")
        self._record(f"{player.player_id} passed")
        self._advance()
        return TurnPassed()

    def declare_safety(self, player_index: int) -> SafetyDeclared:
        self._check_active()
        player = self.seat(player_index)
        if not player.declare_safety():
            raise InvalidSafetyDeclaration(
                f"{player.player_id} holds {player.hand_size} cards, not one"
            )
        self._record(f"{player.player_id} declared safety")
        return SafetyDeclared()

    def check_missed_safety_penalty(self, player_index: int) -> Union[PenaltyApplied, NoPenalty]:
        """Draw the penalty if the player sits on one card without having called it.

        When to call this is the caller's policy.
        """
        self._check_active()
        player = self.seat(player_index)
        if player.hand_size != 1 or player.has_declared_safety:
            return NoPenalty()
        self._draw_into(player, SAFETY_PENALTY)
        self._record(f"{player.player_id} drew {SAFETY_PENALTY} cards (missed safety call)")
        logger.info("%s penalized for a missed safety call", player.player_id)
        return PenaltyApplied(SAFETY_PENALTY)

    def apply(self, player_index: int, action: Action) -> Outcome:
        """Map one inbound action onto exactly one engine command."""
        if isinstance(action, PlayCard):
            return self.play_card(player_index, action.hand_index)
        elif isinstance(action, DrawCard):
            return self.draw_or_resolve_stack(player_index)
        elif isinstance(action, ChooseColor):
            return self.choose_color(player_index, action.color)
        elif isinstance(action, PassTurn):
            return self.pass_turn(player_index)
        elif isinstance(action, DeclareSafety):
            return self.declare_safety(player_index)
        raise TypeError(f"Unknown action: {action!r}")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_active(self) -> None:
        if self._aborted:
            raise DeckExhausted("Match was aborted: the deck is exhausted")
        if self._winner is not None:
            raise GameAlreadyOver(f"{self._players[self._winner].player_id} already won")

    def seat(self, player_index: int) -> Player:
        """The player at ``player_index``; negative or out-of-range indexes raise IndexError."""
        if not 0 <= player_index < len(self._players):
            raise IndexError(f"No player at index {player_index}")
        return self._players[player_index]

    def _turn_holder(self, player_index: int) -> Player:
        player = self.seat(player_index)
        if player_index != self._current:
            raise NotYourTurn(
                f"It is {self.current_player.player_id}'s turn, not {player.player_id}'s"
            )
        return player

    def _check_play(self, player: Player, hand_index: int) -> None:
        card = player.hand[hand_index]
        if self._pending_draw_two:
            if card.kind is not CardKind.DRAW_TWO:
                raise MustResolveDrawStack(
                    f"{self._pending_draw_two} cards pending: play a Draw Two or draw"
                )
            return
        if self._pending_draw_four:
            if card.kind is not CardKind.WILD_DRAW_FOUR:
                raise MustResolveDrawStack(
                    f"{self._pending_draw_four} cards pending: play a Wild Draw Four or draw"
                )
            return
        if not card.can_follow(self.top_card, self._current_color):
            raise IllegalPlay(f"{card} cannot follow {self.top_card} ({self._current_color.value})")
        if card.kind is CardKind.WILD_DRAW_FOUR:
            for i, other in enumerate(player.hand):
                if i != hand_index and other.color == self._current_color:
                    raise WildDrawFourWhenAlternativeExists(
                        f"Holding {other}, which matches {self._current_color.value}"
                    )

    def _resolve_effect(self, card: Card) -> Union[Played, RequiresColorChoice]:
        kind = card.kind
        if kind is CardKind.NUMBER:
            self._advance()
        elif kind is CardKind.SKIP:
            self._advance(2)
        elif kind is CardKind.REVERSE:
            self._direction = self._direction.flipped()
            # With two players a reverse hands the turn straight back.
            self._advance(2 if len(self._players) == 2 else 1)
        elif kind is CardKind.DRAW_TWO:
            self._pending_draw_two += 2
            self._advance()
        elif kind is CardKind.WILD:
            self._awaiting_color = True
            return RequiresColorChoice(card)
        elif kind is CardKind.WILD_DRAW_FOUR:
            self._pending_draw_four += 4
            self._awaiting_color = True
            return RequiresColorChoice(card)
        else:
            raise ValueError(f"Unhandled card kind: {kind}")
        return Played(card)

    def _advance(self, steps: int = 1) -> None:
        self._current = (self._current + steps * self._direction.value) % len(self._players)
        self._drawn_pending = False

    def _draw_into(self, player: Player, count: int) -> List[Card]:
        reclaimable = len(self._discard) - 1
        if count > len(self._deck) + reclaimable:
            self._aborted = True
            logger.warning(
                "Deck exhausted: %d cards needed, %d in draw pile, %d reclaimable",
                count,
                len(self._deck),
                reclaimable,
            )
            raise DeckExhausted(f"Cannot draw {count} cards; both piles are spent")

        drawn = []
        for _ in range(count):
            card = self._deck.draw()
            if card is None:
                self._reclaim_discard()
                card = self._deck.draw()
            player.add_card(card)
            drawn.append(card)
        logger.debug("%s drew %s", player.player_id, ", ".join(str(c) for c in drawn))
        return drawn

    def _reclaim_discard(self) -> None:
        top = self._discard[-1]
        try:
            self._deck.reshuffle(self._discard[:-1])
        except ReshuffleImpossible as e:
            self._aborted = True
            raise DeckExhausted(str(e)) from e
        self._discard = [top]
        self._record("Discard pile reshuffled into the draw pile")

    def _record(self, event: str) -> None:
        self._history.append(event)
        logger.debug(event)


def _coerce_color(color: Union[Color, str]) -> Color:
    try:
        color = Color(color)
    except ValueError:
        raise InvalidColor(f"Unknown color: {color!r}") from None
    if not color.is_concrete:
        raise InvalidColor("A wild must be given a concrete color")
    return color


def get_legal_actions(engine: TurnEngine, player_index: int) -> List[Action]:
    """Return every action the engine would accept from this player now."""
    player = engine.seat(player_index)
    if engine.is_game_over or engine.is_aborted:
        return []

    actions: List[Action] = []
    is_turn = engine.current_player_index == player_index

    if is_turn and engine.phase is TurnPhase.AWAITING_COLOR_CHOICE:
        actions.extend(ChooseColor(color) for color in CONCRETE_COLORS)
    elif is_turn:
        for i in range(player.hand_size):
            if engine.is_legal_play(player_index, i):
                actions.append(PlayCard(i))
        if engine.drawn_card_pending:
            actions.append(PassTurn())
        else:
            actions.append(DrawCard())

    if player.hand_size == 1 and not player.has_declared_safety:
        actions.append(DeclareSafety())
    return actions
