"""Single game runner."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from unoengine.agents.cpu_agent import CpuAgent
from unoengine.agents.human_agent import HumanAgent
from unoengine.config import EngineConfig
from unoengine.engine import (
    DeckExhausted,
    DrawCard,
    DrewOne,
    PassTurn,
    Player,
    RequiresColorChoice,
    RuleViolation,
    SafetyDeclared,
    TurnEngine,
    get_legal_actions,
)

if TYPE_CHECKING:
    from unoengine.agent.protocol import AgentProtocol

logger = logging.getLogger(__name__)

MAX_REJECTED_ACTIONS = 3


@dataclass
class GameResult:
    """Result of a completed game: what a leaderboard would record."""

    winner: Optional[str]
    participant_ids: tuple[str, ...]
    num_turns: int
    aborted: bool = False


def _ends_turn(outcome) -> bool:
    if isinstance(outcome, (RequiresColorChoice, SafetyDeclared)):
        return False
    if isinstance(outcome, DrewOne) and outcome.playable:
        return False
    return True


class GameRunner:
    """Runs a single UNO game to completion.

    Sends one command at a time to the engine. After each player's turn ends,
    that player may declare safety, and then gets checked for a missed call.
    """

    def __init__(
        self,
        agents: dict[str, "AgentProtocol"],
        seed: Optional[int] = None,
        config: Optional[EngineConfig] = None,
    ):
        self._agents = agents
        self._config = config or EngineConfig()
        self._seed = seed if seed is not None else self._config.seed
        self._fallback = CpuAgent(name="fallback")
        self.engine: Optional[TurnEngine] = None

    def run(self) -> GameResult:
        """Run the game and return the result."""
        player_ids = list(self._agents.keys())
        agents = [self._agents[pid] for pid in player_ids]
        players = [
            Player(pid, name=agent.name, is_human=isinstance(agent, HumanAgent))
            for pid, agent in zip(player_ids, agents)
        ]
        engine = TurnEngine.new_match(
            players,
            seed=self._seed,
            hand_size=self._config.hand_size,
            apply_starting_card_effect=self._config.apply_starting_card_effect,
        )
        self.engine = engine
        num_turns = 0
        aborted = False

        try:
            while not engine.is_game_over and num_turns < self._config.max_turns:
                idx = engine.current_player_index
                outcome = self._take_action(engine, agents[idx], idx)
                num_turns += 1
                if _ends_turn(outcome) and not engine.is_game_over:
                    self._enforce_safety_call(engine, agents[idx], idx)
        except DeckExhausted as e:
            logger.warning("Match aborted after %d turns: %s", num_turns, e)
            aborted = True

        winner = engine.winner.player_id if engine.winner else None
        logger.info("Match finished: winner=%s turns=%d aborted=%s", winner, num_turns, aborted)
        return GameResult(
            winner=winner,
            participant_ids=tuple(player_ids),
            num_turns=num_turns,
            aborted=aborted,
        )

    def _take_action(self, engine: TurnEngine, agent: "AgentProtocol", idx: int):
        for _ in range(MAX_REJECTED_ACTIONS):
            legal = get_legal_actions(engine, idx)
            action = agent.get_action(engine.view(idx), legal, idx)
            if action is None:
                action = next((a for a in legal if isinstance(a, (DrawCard, PassTurn))), legal[0])
            try:
                return engine.apply(idx, action)
            except RuleViolation as e:
                logger.warning("%s: %s rejected: %s", agent.name, action, e)

        logger.warning("%s kept sending rejected actions; playing for it", agent.name)
        legal = get_legal_actions(engine, idx)
        return engine.apply(idx, self._fallback.get_action(engine.view(idx), legal, idx))

    def _enforce_safety_call(self, engine: TurnEngine, agent: "AgentProtocol", idx: int) -> None:
        player = engine.players[idx]
        if player.hand_size == 1 and not player.has_declared_safety:
            if agent.wants_to_declare_safety(engine.view(idx)):
                engine.declare_safety(idx)
        engine.check_missed_safety_penalty(idx)
