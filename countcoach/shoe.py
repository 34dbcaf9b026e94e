import logging
import operator
import random
from typing import List, Optional

from .cards import Card, Rank, create_shoe
from .config import CARDS_PER_DECK, MAX_DECKS, MIN_DECKS
from .errors import InvalidConfiguration

logger = logging.getLogger(__name__)

_LOW = frozenset({Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE, Rank.SIX})
_HIGH = frozenset({Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE})


class Shoe:
    def __init__(self, num_decks: int, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        try:
            decks = None if isinstance(num_decks, bool) else operator.index(num_decks)
        except TypeError:
            decks = None
        if decks is None or not MIN_DECKS <= decks <= MAX_DECKS:
            raise InvalidConfiguration(
                f"Number of decks must be between {MIN_DECKS} and {MAX_DECKS}, got {num_decks!r}"
            )
        self.num_decks = decks
        self.rng = rng if rng is not None else random.Random(seed)
        self.shoes_played = 0
        self.cards: List[Card] = []
        self.initial_size = 0
        self.reset()

    @staticmethod
    def _card_value_for_count(card: Card) -> int:
        """Hi-Lo system: 2–6 = +1, 7–9 = 0, 10/A = −1."""
        if card.rank in _LOW:
            return 1
        elif card.rank in _HIGH:
            return -1
        return 0

    def reset(self) -> None:
        if self.initial_size:
            logger.debug("Reshuffling at %.0f%% penetration", self.penetration() * 100)
        self.cards = create_shoe(self.num_decks, self.rng)
        self.initial_size = len(self.cards)
        self.dealt = 0
        self.running_count = 0
        self.shoes_played += 1
        logger.debug("Shoe reset: %d decks, %d cards (shoe #%d)", self.num_decks, self.initial_size, self.shoes_played)

    def pop(self) -> Optional[Card]:
        """Deal the top card, or None once the shoe is exhausted."""
        if not self.cards:
            return None
        card = self.cards.pop()
        self.dealt += 1
        self.running_count += self._card_value_for_count(card)
        return card

    def get_running_count(self) -> int:
        return self.running_count

    def get_true_count(self, estimated_decks_remaining: float) -> float:
        if estimated_decks_remaining <= 0:
            return 0
        return self.running_count / estimated_decks_remaining

    def get_cards_remaining(self) -> int:
        return len(self.cards)

    def get_remaining_cards(self) -> List[Card]:
        return list(self.cards)

    def decks_remaining(self) -> float:
        return len(self.cards) / CARDS_PER_DECK

    def penetration(self) -> float:
        """Fraction of the shoe dealt since the last reset."""
        return self.dealt / self.initial_size
