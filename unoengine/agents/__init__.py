"""Built-in agents."""

from unoengine.agents.cpu_agent import CpuAgent, CpuMove, choose_color, choose_move
from unoengine.agents.human_agent import HumanAgent
from unoengine.agents.llm_agent import LLMAgent

__all__ = ["CpuAgent", "CpuMove", "HumanAgent", "LLMAgent", "choose_color", "choose_move"]
