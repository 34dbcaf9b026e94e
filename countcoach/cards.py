import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence


class Suit(str, Enum):
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"


class Rank(str, Enum):
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"


SUITS = list(Suit)
RANKS = list(Rank)


@dataclass(frozen=True)
class Card:
    suit: Suit
    rank: Rank
    # Rendering key only, never part of equality
    id: str = field(default="", compare=False)

    def __str__(self) -> str:
        return f"{self.rank.value}{self.suit.value[0].upper()}"


def _card_id(rank: Rank, suit: Suit, deck_index: int, rng: random.Random) -> str:
    return f"{rank.value}-{suit.value}-{deck_index}-{rng.getrandbits(32):08x}"


def create_deck(rng: Optional[random.Random] = None, deck_index: int = 0) -> List[Card]:
    """One ordered 52-card deck (suit-major, rank-minor)."""
    rng = rng or random.Random()
    return [Card(suit, rank, _card_id(rank, suit, deck_index, rng)) for suit in SUITS for rank in RANKS]


def shuffle_cards(cards: Sequence[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """Return a shuffled copy; the input sequence is left untouched."""
    rng = rng or random.Random()
    shuffled = list(cards)
    rng.shuffle(shuffled)  # Fisher-Yates
    return shuffled


def create_shoe(num_decks: int, rng: Optional[random.Random] = None) -> List[Card]:
    rng = rng or random.Random()
    cards: List[Card] = []
    for i in range(num_decks):
        cards.extend(create_deck(rng, deck_index=i))
    return shuffle_cards(cards, rng)
