"""Unit tests for the CPU strategy."""

from unoengine.agents import CpuAgent, choose_color, choose_move
from unoengine.engine import (
    CardKind,
    ChooseColor,
    Color,
    DrawCard,
    PlayCard,
    TurnEngine,
    get_legal_actions,
)
from unoengine.engine.card import action, number, wild

R, Y, G, B = Color.RED, Color.YELLOW, Color.GREEN, Color.BLUE


def test_first_legal_card_in_hand_order() -> None:
    hand = [number(G, 1), number(R, 3), number(R, 5)]
    move = choose_move(hand, number(R, 9), R)
    assert move.hand_index == 1
    assert move.color is None
    assert not move.must_draw


def test_no_legal_card_means_draw() -> None:
    move = choose_move([number(G, 1), number(B, 2)], number(R, 9), R)
    assert move.must_draw


def test_wild_color_is_most_common_remaining() -> None:
    hand = [wild(), number(B, 1), number(B, 2), number(R, 3)]
    move = choose_move(hand, number(G, 9), G)
    assert move.hand_index == 0
    assert move.color is B


def test_color_ties_follow_fixed_priority() -> None:
    assert choose_color([number(B, 1), number(Y, 2)]) is Y
    assert choose_color([number(B, 1), number(G, 2), number(B, 3), number(G, 4)]) is G
    assert choose_color([]) is R
    assert choose_color([wild(), wild(draw_four=True)]) is R


def test_wild_draw_four_skipped_when_color_match_held() -> None:
    hand = [wild(draw_four=True), number(R, 1)]
    assert choose_move(hand, number(R, 9), R).hand_index == 1


def test_wild_draw_four_chosen_when_allowed() -> None:
    hand = [wild(draw_four=True), number(B, 3)]
    move = choose_move(hand, number(R, 7), R)
    assert move.hand_index == 0
    assert move.color is B


def test_pending_draw_two_needs_draw_two() -> None:
    top = action(G, CardKind.DRAW_TWO)
    hand = [number(G, 1), action(B, CardKind.DRAW_TWO)]
    assert choose_move(hand, top, G, pending_draw_two=2).hand_index == 1
    assert choose_move(hand[:1], top, G, pending_draw_two=2).must_draw


def test_pending_draw_four_needs_draw_four() -> None:
    hand = [wild(), number(G, 2)]
    assert choose_move(hand, wild(draw_four=True), G, pending_draw_four=4).must_draw


def test_cpu_agent_drives_engine() -> None:
    engine = TurnEngine.from_position(
        hands=[[number(G, 1), wild(), number(B, 2)], [number(G, 3), number(G, 4)]],
        discard_pile=[number(R, 9)],
    )
    agent = CpuAgent()
    legal = get_legal_actions(engine, 0)
    first = agent.get_action(engine.view(0), legal, 0)
    assert first == PlayCard(1)
    engine.apply(0, first)

    second = agent.get_action(engine.view(0), get_legal_actions(engine, 0), 0)
    assert second == ChooseColor(G)


def test_cpu_agent_draws_when_stuck() -> None:
    engine = TurnEngine.from_position(
        hands=[[number(G, 1)], [number(G, 3)]],
        discard_pile=[number(R, 9)],
        draw_pile=[number(Y, 4)],
    )
    agent = CpuAgent()
    assert agent.get_action(engine.view(0), get_legal_actions(engine, 0), 0) == DrawCard()
