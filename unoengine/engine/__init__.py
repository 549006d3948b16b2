"""Game engine for UNO."""

from unoengine.engine.actions import (
    Action,
    ChooseColor,
    ColorChosen,
    DeclareSafety,
    DrawCard,
    DrewOne,
    ForcedDraw,
    NoPenalty,
    PassTurn,
    PenaltyApplied,
    PlayCard,
    Played,
    RequiresColorChoice,
    SafetyDeclared,
    TurnPassed,
)
from unoengine.engine.card import CONCRETE_COLORS, Card, CardKind, Color
from unoengine.engine.deck import Deck, create_deck
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
    UnoEngineError,
    WildDrawFourWhenAlternativeExists,
)
from unoengine.engine.game_state import Direction, PlayerView, TurnPhase
from unoengine.engine.player import Hand, Player
from unoengine.engine.rules import TurnEngine, get_legal_actions

__all__ = [
    "Card",
    "CardKind",
    "Color",
    "CONCRETE_COLORS",
    "Deck",
    "create_deck",
    "Hand",
    "Player",
    "Direction",
    "PlayerView",
    "TurnPhase",
    "TurnEngine",
    "get_legal_actions",
    "Action",
    "PlayCard",
    "DrawCard",
    "ChooseColor",
    "PassTurn",
    "DeclareSafety",
    "Played",
    "RequiresColorChoice",
    "DrewOne",
    "ForcedDraw",
    "ColorChosen",
    "TurnPassed",
    "SafetyDeclared",
    "PenaltyApplied",
    "NoPenalty",
    "UnoEngineError",
    "RuleViolation",
    "NotYourTurn",
    "InvalidCard",
    "IllegalPlay",
    "MustResolveDrawStack",
    "WildDrawFourWhenAlternativeExists",
    "ColorChoicePending",
    "NoColorChoicePending",
    "InvalidColor",
    "InvalidSafetyDeclaration",
    "AlreadyDrew",
    "NothingToPass",
    "GameAlreadyOver",
    "ReshuffleImpossible",
    "DeckExhausted",
]
