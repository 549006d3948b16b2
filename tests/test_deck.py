"""Unit tests for deck construction and the draw pile."""

from collections import Counter

import pytest

from unoengine.engine import CardKind, Color, Deck, ReshuffleImpossible, create_deck
from unoengine.engine.card import number, wild


def test_create_deck_size() -> None:
    deck = create_deck(seed=42)
    assert len(deck) == 108


def test_create_deck_composition() -> None:
    counts = Counter(create_deck(seed=1))
    assert counts[number(Color.RED, 0)] == 1
    assert counts[number(Color.BLUE, 7)] == 2
    assert sum(1 for c in counts.elements() if c.kind is CardKind.SKIP) == 8
    assert counts[wild()] == 4
    assert counts[wild(draw_four=True)] == 4
    assert len(counts) == 4 * (10 + 3) + 2


def test_create_deck_reproducible() -> None:
    d1 = create_deck(seed=123)
    d2 = create_deck(seed=123)
    assert [str(c) for c in d1] == [str(c) for c in d2]


def test_deck_seeded_shuffle_is_reproducible() -> None:
    assert Deck(seed=9).cards == Deck(seed=9).cards
    assert Counter(Deck(seed=9).cards) == Counter(create_deck(shuffle=False))


def test_draw_until_empty() -> None:
    deck = Deck.from_cards([number(Color.RED, 1), number(Color.RED, 2)])
    assert deck.draw() == number(Color.RED, 2)
    assert deck.draw() == number(Color.RED, 1)
    assert deck.draw() is None
    assert len(deck) == 0


def test_reshuffle_refills() -> None:
    deck = Deck.from_cards([], seed=3)
    deck.reshuffle([number(Color.GREEN, 4), number(Color.BLUE, 5)])
    assert len(deck) == 2
    drawn = {deck.draw(), deck.draw()}
    assert drawn == {number(Color.GREEN, 4), number(Color.BLUE, 5)}


def test_reshuffle_with_nothing_fails() -> None:
    deck = Deck.from_cards([])
    with pytest.raises(ReshuffleImpossible):
        deck.reshuffle([])


def test_put_bottom() -> None:
    deck = Deck.from_cards([number(Color.RED, 1)])
    deck.put_bottom(wild(draw_four=True))
    assert deck.draw() == number(Color.RED, 1)
    assert deck.draw() == wild(draw_four=True)
