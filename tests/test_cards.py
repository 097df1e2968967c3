import random

import numpy as np
import pytest

from deck_generator.cards import (
    SpotItCard,
    SpotItDeck,
    check_projective_plane_deck,
    deck_to_deck_matrix,
    is_spot_it_deck,
    match_exactly_one_symbol,
)


class TestSpotItCard:
    def test_equality_is_set_equality(self):
        assert SpotItCard(["Banana"]) == SpotItCard(["Banana"])
        assert SpotItCard(["Banana"]) != SpotItCard(["Apple"])
        assert SpotItCard(["Apple"]) != SpotItCard(["Banana", "Apple"])
        assert SpotItCard(["Banana", "Apple"]) == SpotItCard(["Apple", "Banana"])
        # same symbol added twice
        assert SpotItCard(["Apple"]) == SpotItCard(["Apple", "Apple"])

    def test_add_existing_symbol_is_noop(self):
        card = SpotItCard(["Apple"])
        card.add("Apple")
        assert len(card) == 1
        card.add("Banana")
        assert len(card) == 2
        assert card.symbols() == ["Apple", "Banana"]

    def test_match_exactly_one_symbol(self):
        banana = SpotItCard(["Banana"])
        banana_apple = SpotItCard(["Banana", "Apple"])
        banana_apple_2 = SpotItCard(["Banana", "Apple"])
        chico = SpotItCard(["ChicoFruit"])

        assert banana.match_exactly_one_symbol(banana_apple)
        assert banana_apple.match_exactly_one_symbol(banana)
        # two shared symbols
        assert not banana_apple.match_exactly_one_symbol(banana_apple_2)
        # nothing shared
        assert not chico.match_exactly_one_symbol(banana_apple)

    def test_empty_cards_do_not_match(self):
        assert not match_exactly_one_symbol(SpotItCard(), SpotItCard())

    def test_match_is_symmetric(self):
        rng = random.Random(0)
        pool = ["A", "B", "C", "D", "E"]
        for _ in range(50):
            a = SpotItCard(rng.sample(pool, rng.randint(0, 5)))
            b = SpotItCard(rng.sample(pool, rng.randint(0, 5)))
            assert match_exactly_one_symbol(a, b) == match_exactly_one_symbol(b, a)

    def test_shared_symbols(self):
        a = SpotItCard(["Apple", "Banana", "Cherry"])
        b = SpotItCard(["Cherry", "Date"])
        assert a.shared_symbols(b) == {"Cherry"}


class TestSpotItDeck:
    def test_push_pop_same_card(self):
        deck = SpotItDeck()
        card = SpotItCard(["Apple"])
        deck.push_card(card)
        assert deck.pop_card() == card
        assert deck.pop_card() is None
        assert deck.is_empty()

    def test_pop_card_at(self):
        deck = SpotItDeck(SpotItCard([s]) for s in ["A", "B", "C"])
        assert deck.pop_card_at(1) == SpotItCard(["B"])
        assert len(deck) == 2
        assert deck[1] == SpotItCard(["C"])
        assert deck.pop_card_at(2) is None
        assert deck.pop_card_at(-1) is None
        assert len(deck) == 2

    def test_default_deck(self):
        deck = SpotItDeck.default()
        assert len(deck) == 93
        assert all(len(card) == 1 for card in deck)
        for i, card in enumerate(deck):
            assert all(other != card for other in deck.cards[i + 1 :])

    def test_shuffle_keeps_cards(self):
        deck = SpotItDeck.default()
        before = deck.copy()
        deck.shuffle(random.Random(1))
        assert len(deck) == len(before)
        assert sorted(c.symbols()[0] for c in deck) == sorted(c.symbols()[0] for c in before)
        assert deck != before

    def test_shuffle_with_global_random_is_seeded(self):
        a = SpotItDeck.default()
        b = SpotItDeck.default()
        random.seed(3)
        a.shuffle()
        random.seed(3)
        b.shuffle()
        assert a == b

    def test_copy_is_independent(self):
        deck = SpotItDeck([SpotItCard(["A", "B"])])
        copied = deck.copy()
        copied[0].add("C")
        copied.push_card(SpotItCard(["D"]))
        assert deck[0] == SpotItCard(["A", "B"])
        assert len(deck) == 1

    def test_to_symbol_ids(self):
        deck = SpotItDeck([SpotItCard(["Banana", "Apple"])])
        assert deck.to_symbol_ids() == [[0, 3]]


def _fano_deck() -> SpotItDeck:
    lines = [(0, 1, 2), (0, 3, 4), (0, 5, 6), (1, 3, 5), (1, 4, 6), (2, 3, 6), (2, 4, 5)]
    return SpotItDeck(SpotItCard(f"S{i}" for i in line) for line in lines)


def test_deck_matrix():
    deck = _fano_deck()
    deck_m, symbols = deck_to_deck_matrix(deck)
    assert deck_m.shape == (7, 7)
    assert symbols == [f"S{i}" for i in range(7)]
    assert np.all(deck_m.sum(axis=1) == 3)
    assert deck_m[0].tolist() == [1, 1, 1, 0, 0, 0, 0]


def test_check_projective_plane_deck():
    deck = _fano_deck()
    assert is_spot_it_deck(deck)
    check_projective_plane_deck(deck, 2)


def test_check_projective_plane_deck_rejects_broken_deck():
    deck = _fano_deck()
    deck.pop_card()
    deck.push_card(SpotItCard(["S0", "S1", "S6"]))
    assert not is_spot_it_deck(deck)
    with pytest.raises(AssertionError):
        check_projective_plane_deck(deck, 2)
