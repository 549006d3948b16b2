"""Tournament - run many games and aggregate results."""

import logging
import random
from collections import defaultdict
from typing import Any, Optional

from unoengine.config import EngineConfig
from unoengine.orchestration.game_runner import GameRunner

logger = logging.getLogger(__name__)


def run_tournament(
    agents: dict[str, Any],
    num_games: int = 100,
    seed: int | None = None,
    config: Optional[EngineConfig] = None,
) -> dict[str, int]:
    """Run ``num_games`` matches between the same agents.

    Seating order alternates every game so nobody always moves first. Aborted
    and unfinished matches count for nobody.

    Returns:
        Dict mapping player_id to number of wins.
    """
    player_ids = list(agents.keys())
    wins: dict[str, int] = defaultdict(int)

    rng = random.Random(seed)
    for g in range(num_games):
        order = player_ids if g % 2 == 0 else list(reversed(player_ids))
        ordered_agents = {pid: agents[pid] for pid in order}
        runner = GameRunner(ordered_agents, seed=rng.randint(0, 2**31 - 1), config=config)
        result = runner.run()
        if result.aborted:
            logger.warning("Game %d aborted: deck exhausted", g)
        elif result.winner:
            wins[result.winner] += 1

    return dict(wins)
