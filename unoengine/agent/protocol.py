"""Agent protocol - interface that CPU, LLM and human agents implement."""

from typing import Protocol

from unoengine.engine import Action, PlayerView


class AgentProtocol(Protocol):
    """Interface for UNO-playing agents."""

    @property
    def name(self) -> str:
        """Display name for the agent."""
        ...

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        player_index: int,
    ) -> Action | None:
        """Choose an action given the player view and legal actions.

        Args:
            player_view: Filtered view with only this player's hand and public info.
            legal_actions: List of valid actions to choose from.
            player_index: This agent's seat.

        Returns:
            One of the legal actions, or None to draw (when DrawCard is legal).
        """
        ...

    def wants_to_declare_safety(self, player_view: PlayerView) -> bool:
        """Called once the agent's turn ends while it holds a single card."""
        ...
