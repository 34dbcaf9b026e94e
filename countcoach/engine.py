import logging
import random
from typing import Iterable, List, Optional, Union

from .cards import Card, Rank, create_deck, create_shoe, shuffle_cards
from .config import CARDS_PER_DECK, DEFAULT_ENGINE_DECKS, MIN_DECKS_REMAINING
from .systems import CountingSystem, CountingSystemConfig, bet_multiplier_for, get_system

logger = logging.getLogger(__name__)

_MIN_CARDS_REMAINING = int(MIN_DECKS_REMAINING * CARDS_PER_DECK)


def trunc_div(numerator: int, denominator: int) -> int:
    """Integer division truncated toward zero."""
    q = abs(numerator) // abs(denominator)
    return q if (numerator >= 0) == (denominator > 0) else -q


class CardCountingEngine:
    def __init__(self, system: Union[CountingSystem, str] = CountingSystem.HI_LO,
                 total_decks: int = DEFAULT_ENGINE_DECKS):
        self.config: CountingSystemConfig = get_system(system)
        self.system = self.config.system
        self.total_decks = total_decks
        self.running_count = 0
        self.cards_dealt = 0
        logger.debug("Counting engine using %s over %d decks", self.config.name, total_decks)

    def get_card_value(self, rank: Rank) -> int:
        return self.config.values[rank]

    def count_card(self, card: Card) -> int:
        self.running_count += self.get_card_value(card.rank)
        self.cards_dealt += 1
        return self.running_count

    def count_cards(self, cards: Iterable[Card]) -> int:
        for card in cards:
            self.count_card(card)
        return self.running_count

    def get_running_count(self) -> int:
        return self.running_count

    def get_decks_remaining(self) -> float:
        cards_remaining = self.total_decks * CARDS_PER_DECK - self.cards_dealt
        return max(MIN_DECKS_REMAINING, cards_remaining / CARDS_PER_DECK)

    def get_true_count(self) -> int:
        """Running count per deck remaining, truncated toward zero (7 / 3 -> 2, -7 / 3 -> -2)."""
        cards_remaining = self.total_decks * CARDS_PER_DECK - self.cards_dealt
        # integer arithmetic: 27 over 54 cards is exactly 26
        return trunc_div(self.running_count * CARDS_PER_DECK, max(cards_remaining, _MIN_CARDS_REMAINING))

    def get_bet_multiplier(self, min_bet: float = 1) -> int:
        return bet_multiplier_for(self.get_true_count())

    def reset(self) -> None:
        self.running_count = 0
        self.cards_dealt = 0

    # ----- Deck / scoring helpers -----
    @staticmethod
    def create_deck(rng: Optional[random.Random] = None) -> List[Card]:
        return shuffle_cards(create_deck(rng), rng)

    @staticmethod
    def create_shoe(num_decks: int, rng: Optional[random.Random] = None) -> List[Card]:
        return create_shoe(num_decks, rng)

    @staticmethod
    def shuffle_deck(cards: List[Card], rng: Optional[random.Random] = None) -> List[Card]:
        return shuffle_cards(cards, rng)

    @staticmethod
    def validate_count(user_count: int, actual_count: int) -> bool:
        return user_count == actual_count

    @staticmethod
    def calculate_accuracy(correct: int, total: int) -> float:
        if total == 0:
            return 0.0
        return correct / total * 100

    @staticmethod
    def calculate_cards_per_minute(cards_count: int, time_ms: float) -> float:
        if time_ms <= 0:
            return 0.0
        return cards_count / (time_ms / 60_000)
