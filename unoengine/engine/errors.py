"""Engine exceptions.

RuleViolation subclasses are recoverable: the command was refused and no state
changed, so the caller can prompt the same player again. DeckExhausted is fatal
and ends the match.
"""


class UnoEngineError(Exception):
    """Base class for every error raised by the engine."""

    pass


class RuleViolation(UnoEngineError):
    """A command was refused; engine state is unchanged."""

    pass


class NotYourTurn(RuleViolation):
    pass


class InvalidCard(RuleViolation):
    """Hand index out of range."""

    pass


class IllegalPlay(RuleViolation):
    """The card cannot be played on the current top card."""

    pass


class MustResolveDrawStack(IllegalPlay):
    """A draw stack is pending and the card does not extend it."""

    pass


class WildDrawFourWhenAlternativeExists(IllegalPlay):
    """Wild Draw Four played while holding a card of the current color."""

    pass


class ColorChoicePending(RuleViolation):
    """A wild was played and its color has not been chosen yet."""

    pass


class NoColorChoicePending(RuleViolation):
    pass


class InvalidColor(RuleViolation):
    pass


class InvalidSafetyDeclaration(RuleViolation):
    """Safety can only be declared while holding exactly one card."""

    pass


class AlreadyDrew(RuleViolation):
    """The player already drew this turn and must play or pass."""

    pass


class NothingToPass(RuleViolation):
    pass


class GameAlreadyOver(RuleViolation):
    pass


class ReshuffleImpossible(UnoEngineError):
    """The discard pile has nothing to give back to the draw pile."""

    pass


class DeckExhausted(UnoEngineError):
    """Neither pile can supply a card. The match cannot continue."""

    pass
