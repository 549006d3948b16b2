"""LLM agent using OpenAI library with OpenRouter, Groq, Ollama or Hugging Face."""

import json
import logging
import os
import re
import time
from typing import Optional

from openai import OpenAI

from unoengine.agents.cpu_agent import CpuAgent
from unoengine.agents.human_agent import describe_action
from unoengine.engine import Action, Direction, DrawCard, PlayerView

logger = logging.getLogger(__name__)

OPENROUTER_BASE = "https://openrouter.ai/api/v1"
GROQ_BASE = "https://api.groq.com/openai/v1"
OLLAMA_BASE = "http://localhost:11434/v1"
HUGGINGFACE_BASE = "https://router.huggingface.co/v1"


def _format_player_view(pv: PlayerView) -> str:
    """Format player view as text for the LLM."""
    lines = [
        "=== Your hand ===",
        " ".join(str(c) for c in pv.my_hand),
        "",
        "=== Top card on discard ===",
        str(pv.top_discard),
        "",
        "=== Current color to match ===",
        pv.current_color.value.upper(),
        "",
        "=== Other players' card counts ===",
    ]
    for i, (pid, count) in enumerate(zip(pv.player_ids, pv.num_cards_per_player)):
        if i != pv.player_index:
            lines.append(f"  {pid}: {count} cards")
    lines.extend([
        "",
        "=== Direction ===",
        "clockwise" if pv.direction is Direction.CLOCKWISE else "counter-clockwise",
        "",
        "=== Pending draws (you must stack or draw them) ===",
        str(pv.pending_draws),
        "",
        "=== Game History (last 10 events) ===",
    ])
    if pv.history:
        lines.extend(f"- {h}" for h in pv.history)
    else:
        lines.append("No history yet.")
    return "\n".join(lines)


def _format_legal_actions(actions: list[Action], hand) -> str:
    """Format legal actions as text."""
    return "\n".join(f"{i}: {describe_action(a, hand)}" for i, a in enumerate(actions))


def _parse_action_response(response: str, actions: list[Action]) -> Action | None:
    """Parse LLM response into an Action."""
    # 1. A JSON object, tolerating single quotes
    json_match = re.search(r"(\{.*?\})", response, re.DOTALL)
    if json_match:
        json_str = json_match.group(1)
        for candidate in (json_str, json_str.replace("'", '"')):
            try:
                data = json.loads(candidate)
            except json.JSONDecodeError:
                continue
            if isinstance(data, dict) and isinstance(data.get("action_index"), int):
                idx = data["action_index"]
                if 0 <= idx < len(actions):
                    return actions[idx]
                logger.debug("Index %d out of range (0-%d)", idx, len(actions) - 1)
            break

    # 2. Matches: "action_index": 1, 'action_index': 1, action_index: 1
    match = re.search(r'["\']?action_index["\']?\s*:\s*(\d+)', response, re.IGNORECASE)
    if match:
        idx = int(match.group(1))
        if 0 <= idx < len(actions):
            return actions[idx]

    # 3. Fallback: Look for "DRAW" literally
    if "DRAW" in response.upper():
        for a in actions:
            if isinstance(a, DrawCard):
                return a

    # 4. Last resort: a standalone number
    cleaned_response = re.sub(r'[{}\[\]"\'.,:]', " ", response)
    for word in cleaned_response.split():
        if word.isdigit():
            idx = int(word)
            if 0 <= idx < len(actions):
                return actions[idx]

    return None


class LLMAgent:
    """Agent that asks an LLM to choose actions, falling back to the CPU strategy."""

    def __init__(
        self,
        provider: str = "openrouter",
        model: str = "openai/gpt-4o-mini",
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        rate_limit: Optional[float] = None,
        max_attempts: int = 3,
    ):
        if provider == "openrouter":
            base_url = OPENROUTER_BASE
            key = api_key or os.environ.get("OPENROUTER_API_KEY")
        elif provider == "groq":
            base_url = GROQ_BASE
            key = api_key or os.environ.get("GROQ_API_KEY")
        elif provider == "ollama":
            base_url = os.environ.get("OLLAMA_BASE_URL", OLLAMA_BASE)
            key = "ollama"
        elif provider == "huggingface":
            base_url = HUGGINGFACE_BASE
            key = api_key or os.environ.get("HUGGINGFACE_API_KEY")
        else:
            raise ValueError(f"Unknown provider: {provider}")

        if not key:
            raise ValueError(f"API key required for {provider}. Set {provider.upper()}_API_KEY or pass api_key.")

        self._client = OpenAI(api_key=key, base_url=base_url)
        self._model = model
        self._timeout = timeout
        self._provider = provider
        self._rate_limit = rate_limit  # Requests per minute
        self._max_attempts = max_attempts
        self._request_history: list[float] = []
        self._fallback = CpuAgent(name=f"{self.name}-fallback")

        logger.info(
            "[%s] provider=%s base_url=%s timeout=%ss rate_limit=%s rpm",
            self.name, provider, base_url, timeout, rate_limit or "None",
        )

    @property
    def name(self) -> str:
        return f"llm-{self._model}"

    def _wait_for_rate_limit(self) -> None:
        """Block if rate limit is exceeded."""
        if not self._rate_limit:
            return

        now = time.time()
        self._request_history = [t for t in self._request_history if now - t < 60.0]

        if len(self._request_history) >= self._rate_limit:
            wait_time = 60.0 - (now - self._request_history[0])
            if wait_time > 0:
                logger.info("[%s] Rate limit reached, waiting %.2fs", self.name, wait_time)
                time.sleep(wait_time)

        self._request_history.append(time.time())

    def _build_prompt(self, player_view: PlayerView, legal_actions: list[Action]) -> str:
        return f"""You are playing UNO.
Objective: Win by playing all your cards. Match the top discard card by color (Red, Blue, Green, Yellow) or by number/symbol (Skip, Reverse, Draw Two). Wild cards can be played on anything, but a Wild Draw Four only when you hold no card of the current color. Pending Draw Two / Draw Four stacks can only be extended with the same card, otherwise you must draw them.

{_format_player_view(player_view)}

=== Legal actions ===
{_format_legal_actions(legal_actions, player_view.my_hand)}

INSTRUCTIONS:
Select the best action to win the game.
Respond with a JSON object containing the index of your chosen action.
Example: {{"action_index": 2}}
"""

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        player_index: int,
    ) -> Action | None:
        if not legal_actions:
            return None
        if len(legal_actions) == 1:
            return legal_actions[0]

        prompt = self._build_prompt(player_view, legal_actions)
        for attempt in range(1, self._max_attempts + 1):
            start_time = time.time()
            try:
                self._wait_for_rate_limit()

                kwargs = {
                    "model": self._model,
                    "messages": [{"role": "user", "content": prompt}],
                    "timeout": self._timeout,
                }
                if "gpt-4" in self._model or "gpt-3.5" in self._model or self._provider == "groq":
                    kwargs["response_format"] = {"type": "json_object"}

                resp = self._client.chat.completions.create(**kwargs)
                content = resp.choices[0].message.content or ""
                logger.debug("[%s] Response in %.2fs: %s", self.name, time.time() - start_time, content)

                action = _parse_action_response(content, legal_actions)
                if action is not None:
                    return action
                logger.warning("[%s] Could not parse an action from: %r", self.name, content)
            except Exception as e:
                logger.warning(
                    "[%s] Attempt %d failed after %.2fs: %s: %s",
                    self.name, attempt, time.time() - start_time, type(e).__name__, e,
                )

        logger.warning("[%s] All attempts failed, using the CPU strategy", self.name)
        return self._fallback.get_action(player_view, legal_actions, player_index)

    def wants_to_declare_safety(self, player_view: PlayerView) -> bool:
        return True
