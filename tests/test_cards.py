"""
Tests for the card model and deck builders
Run with: pytest tests/test_cards.py -v
"""

import random
from collections import Counter

from countcoach.cards import RANKS, SUITS, Card, Rank, Suit, create_deck, create_shoe, shuffle_cards


class TestCard:
    def test_equality_ignores_id(self):
        a = Card(Suit.SPADES, Rank.ACE, "x")
        b = Card(Suit.SPADES, Rank.ACE, "y")
        assert a == b

    def test_str(self):
        assert str(Card(Suit.HEARTS, Rank.TEN)) == "10H"


class TestDeckBuilders:
    def test_deck_has_every_card_once(self):
        deck = create_deck(random.Random(1))
        assert len(deck) == 52
        assert len({(c.suit, c.rank) for c in deck}) == 52

    def test_ids_are_unique_across_shoe(self):
        shoe = create_shoe(8, random.Random(2))
        assert len({c.id for c in shoe}) == len(shoe)

    def test_shoe_composition(self):
        shoe = create_shoe(3, random.Random(3))
        assert len(shoe) == 156
        ranks = Counter(c.rank for c in shoe)
        suits = Counter(c.suit for c in shoe)
        assert all(ranks[r] == 12 for r in RANKS)
        assert all(suits[s] == 39 for s in SUITS)

    def test_shuffle_returns_copy(self):
        deck = create_deck(random.Random(4))
        before = list(deck)
        shuffled = shuffle_cards(deck, random.Random(5))
        assert deck == before
        assert Counter(shuffled) == Counter(deck)
        assert [c.id for c in shuffled] != [c.id for c in deck]

    def test_seeded_shoe_is_reproducible(self):
        a = create_shoe(2, random.Random(42))
        b = create_shoe(2, random.Random(42))
        assert [c.id for c in a] == [c.id for c in b]
