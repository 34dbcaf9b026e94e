"""
Tests for the dealing shoe and its Hi-Lo ground-truth count
Run with: pytest tests/test_shoe.py -v
"""

import logging
import random
from collections import Counter

import numpy as np
import pytest

from countcoach.cards import RANKS, Rank
from countcoach.errors import InvalidConfiguration
from countcoach.shoe import Shoe

LOW = {Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE, Rank.SIX}
HIGH = {Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE}


def hi_lo(rank):
    if rank in LOW:
        return 1
    if rank in HIGH:
        return -1
    return 0


class TestConstruction:
    @pytest.mark.parametrize("decks", range(1, 9))
    def test_card_total(self, decks):
        shoe = Shoe(decks, seed=decks)
        assert shoe.get_cards_remaining() == 52 * decks
        assert shoe.get_running_count() == 0

    @pytest.mark.parametrize("decks", [0, 9, -1])
    def test_invalid_deck_count(self, decks):
        with pytest.raises(InvalidConfiguration):
            Shoe(decks)

    @pytest.mark.parametrize("decks", [True, False, 2.0, "6", None])
    def test_non_integer_deck_count(self, decks):
        with pytest.raises(InvalidConfiguration):
            Shoe(decks)

    def test_accepts_integer_like_deck_count(self):
        shoe = Shoe(np.int64(6), seed=1)
        assert shoe.num_decks == 6
        assert shoe.get_cards_remaining() == 312

    def test_invalid_configuration_is_a_value_error(self):
        with pytest.raises(ValueError):
            Shoe(12)

    @pytest.mark.parametrize("decks", [1, 6])
    def test_four_of_each_rank_per_deck(self, decks):
        cards = Shoe(decks, seed=7).get_remaining_cards()
        counts = Counter(c.rank for c in cards)
        assert all(counts[r] == 4 * decks for r in RANKS)
        pairs = Counter((c.suit, c.rank) for c in cards)
        assert set(pairs.values()) == {decks}

    def test_shuffled_differently(self):
        a = Shoe(1, seed=1).get_remaining_cards()
        b = Shoe(1, seed=2).get_remaining_cards()
        assert [(c.suit, c.rank) for c in a] != [(c.suit, c.rank) for c in b]

    def test_same_seed_same_order(self):
        a = Shoe(2, seed=99).get_remaining_cards()
        b = Shoe(2, seed=99).get_remaining_cards()
        assert [c.id for c in a] == [c.id for c in b]


class TestDealing:
    def test_pop_reduces_remaining(self):
        shoe = Shoe(1, seed=3)
        card = shoe.pop()
        assert card is not None
        assert shoe.get_cards_remaining() == 51

    def test_empty_shoe_returns_none(self):
        shoe = Shoe(1, seed=4)
        for _ in range(52):
            assert shoe.pop() is not None
        assert shoe.get_cards_remaining() == 0
        assert shoe.pop() is None
        assert shoe.get_cards_remaining() == 0

    def test_remaining_plus_dealt_is_constant(self):
        shoe = Shoe(2, seed=5)
        for i in range(1, 105):
            shoe.pop()
            assert shoe.get_cards_remaining() + shoe.dealt == 104
        assert shoe.penetration() == 1.0

    def test_remaining_cards_is_a_copy(self):
        shoe = Shoe(1, seed=6)
        cards = shoe.get_remaining_cards()
        cards.clear()
        assert shoe.get_cards_remaining() == 52

    def test_pop_deals_from_the_end(self):
        shoe = Shoe(1, seed=8)
        last = shoe.get_remaining_cards()[-1]
        assert shoe.pop().id == last.id


class TestRunningCount:
    def test_each_pop_applies_hi_lo(self):
        shoe = Shoe(6, seed=11)
        expected = 0
        for _ in range(200):
            card = shoe.pop()
            expected += hi_lo(card.rank)
            assert shoe.get_running_count() == expected

    @pytest.mark.parametrize("seed", range(20))
    def test_full_deck_returns_to_zero(self, seed):
        shoe = Shoe(1, seed=seed)
        while shoe.pop() is not None:
            pass
        assert shoe.get_running_count() == 0

    def test_count_is_deterministic_for_an_order(self):
        a = Shoe(1, rng=random.Random(21))
        b = Shoe(1, rng=random.Random(21))
        for _ in range(30):
            a.pop()
            b.pop()
        assert a.get_running_count() == b.get_running_count()


class TestTrueCount:
    def test_division(self):
        shoe = Shoe(1, seed=1)
        shoe.running_count = 6
        assert shoe.get_true_count(2) == 3
        assert shoe.get_true_count(4) == 1.5

    @pytest.mark.parametrize("decks", [0, -1, -0.5])
    def test_non_positive_decks_returns_zero(self, decks):
        shoe = Shoe(1, seed=1)
        shoe.running_count = 5
        assert shoe.get_true_count(decks) == 0

    def test_exhausted_shoe(self):
        shoe = Shoe(1, seed=2)
        while shoe.pop() is not None:
            pass
        assert shoe.get_true_count(shoe.decks_remaining()) == 0


class TestReset:
    def test_reset_restores_full_shoe(self):
        shoe = Shoe(6, seed=12)
        for _ in range(50):
            shoe.pop()
        assert shoe.get_cards_remaining() == 312 - 50
        shoe.reset()
        assert shoe.get_cards_remaining() == 312
        assert shoe.get_running_count() == 0
        assert shoe.dealt == 0

    def test_reset_reshuffles(self):
        shoe = Shoe(1, seed=13)
        first = [(c.suit, c.rank) for c in shoe.get_remaining_cards()]
        shoe.reset()
        second = [(c.suit, c.rank) for c in shoe.get_remaining_cards()]
        assert first != second
        assert Counter(first) == Counter(second)

    def test_penetration_logged_on_reshuffle(self, caplog):
        shoe = Shoe(1, seed=15)
        for _ in range(39):
            shoe.pop()
        assert shoe.penetration() == 0.75
        with caplog.at_level(logging.DEBUG, logger="countcoach.shoe"):
            shoe.reset()
        assert "75% penetration" in caplog.text

    def test_reset_repeatedly(self):
        shoe = Shoe(2, seed=14)
        for _ in range(5):
            shoe.pop()
            shoe.reset()
        assert shoe.get_cards_remaining() == 104
        assert shoe.shoes_played == 6
