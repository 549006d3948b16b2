"""Tests for the LLM agent's response parsing and CPU fallback."""

from types import SimpleNamespace

import pytest

from unoengine.agents import CpuAgent, LLMAgent
from unoengine.agents.llm_agent import _parse_action_response
from unoengine.engine import Color, DrawCard, PlayCard, TurnEngine, get_legal_actions
from unoengine.engine.card import number

R, B = Color.RED, Color.BLUE

ACTIONS = [PlayCard(0), PlayCard(1), DrawCard()]


class StubCompletions:
    """Stands in for ``client.chat.completions``, replying from a fixed script."""

    def __init__(self, replies):
        self._replies = list(replies)
        self.calls = 0

    def create(self, **kwargs):
        self.calls += 1
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        message = SimpleNamespace(content=reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def make_agent(replies, max_attempts: int = 2):
    agent = LLMAgent(provider="ollama", model="llama3", api_key="x", max_attempts=max_attempts)
    completions = StubCompletions(replies)
    agent._client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return agent, completions


@pytest.fixture
def table():
    engine = TurnEngine.from_position(
        hands=[[number(R, 5), number(R, 7), number(B, 2)], [number(B, 4)]],
        discard_pile=[number(R, 9)],
    )
    return engine.view(0), get_legal_actions(engine, 0)


@pytest.mark.parametrize(
    "response, expected",
    [
        ('{"action_index": 1}', PlayCard(1)),
        ('Sure, here you go: {"action_index": 0}', PlayCard(0)),
        ("{'action_index': 2}", DrawCard()),
        ("I pick action_index: 1 since red is safe", PlayCard(1)),
        ("I will DRAW a card", DrawCard()),
        ("Play 0", PlayCard(0)),
    ],
)
def test_parse_action_response(response, expected) -> None:
    assert _parse_action_response(response, ACTIONS) == expected


@pytest.mark.parametrize("response", ['{"action_index": 7}', "action_index: 3", "no idea", ""])
def test_parse_rejects_unusable_replies(response) -> None:
    assert _parse_action_response(response, ACTIONS) is None


def test_good_reply_is_used(table) -> None:
    view, legal = table
    agent, completions = make_agent(['{"action_index": 1}'])
    assert agent.get_action(view, legal, 0) == legal[1]
    assert completions.calls == 1


def test_retries_after_unparseable_reply(table) -> None:
    view, legal = table
    agent, completions = make_agent(["hmm", '{"action_index": 0}'])
    assert agent.get_action(view, legal, 0) == legal[0]
    assert completions.calls == 2


def test_falls_back_to_cpu_choice(table) -> None:
    view, legal = table
    agent, completions = make_agent([RuntimeError("connection refused"), '{"action_index": 9}'])
    assert agent.get_action(view, legal, 0) == CpuAgent().get_action(view, legal, 0)
    assert completions.calls == 2


def test_single_legal_action_skips_the_model() -> None:
    engine = TurnEngine.from_position(hands=[[number(B, 2), number(B, 3)], [number(B, 4)]], discard_pile=[number(R, 9)])
    agent, completions = make_agent([])
    legal = get_legal_actions(engine, 0)
    assert legal == [DrawCard()]
    assert agent.get_action(engine.view(0), legal, 0) == DrawCard()
    assert completions.calls == 0


def test_unknown_provider() -> None:
    with pytest.raises(ValueError):
        LLMAgent(provider="nowhere", api_key="x")
