"""Practice drills for the counting trainer.

A :class:`DrillEngine` runs one session of a single drill type::

    engine = DrillEngine(DrillConfig(DrillType.CARD_PAIRS))
    engine.start_drill()
    q = engine.generate_question()
    engine.submit_answer(user_guess)
    engine.get_results()

Card questions are answered with the net count of the dealt cards under the
configured counting system. True-count and bet-sizing questions are synthetic:
no cards are shown, the answer follows the engine's truncation and betting
ramp rules.
"""

import logging
import random
import time
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple, Union

from .cards import Card
from .config import CARDS_PER_DECK, DEFAULT_MIN_BET, RUNNING_COUNT_MAX_CARDS, RUNNING_COUNT_MIN_CARDS
from .engine import CardCountingEngine, trunc_div
from .errors import NoActiveQuestion
from .shoe import Shoe
from .systems import CountingSystem, bet_multiplier_for, get_system

logger = logging.getLogger(__name__)


class DrillType(str, Enum):
    SINGLE_CARD_FLASH = "single_card_flash"
    CARD_PAIRS = "card_pairs"
    CARD_TRIPLETS = "card_triplets"
    RUNNING_COUNT = "running_count"
    DECK_COUNTDOWN = "deck_countdown"
    TRUE_COUNT_CALC = "true_count_calc"
    BET_SIZING = "bet_sizing"
    SPEED_DRILL = "speed_drill"
    DISTRACTION_DRILL = "distraction_drill"


# Flash drills: number of cards per question
_FLASH_SIZES = {
    DrillType.SINGLE_CARD_FLASH: 1,
    DrillType.CARD_PAIRS: 2,
    DrillType.CARD_TRIPLETS: 3,
    DrillType.SPEED_DRILL: 1,
    DrillType.DISTRACTION_DRILL: 1,
}


@dataclass(frozen=True)
class DrillConfig:
    type: DrillType
    card_display_time_ms: int = 1000
    target_accuracy: float = 90.0  # percent
    target_speed: float = 30.0     # cards per minute
    duration_ms: int = 60_000
    system: CountingSystem = CountingSystem.HI_LO
    min_bet: float = DEFAULT_MIN_BET


@dataclass(frozen=True)
class DrillQuestion:
    cards: Tuple[Card, ...]
    correct_answer: Union[int, float]
    question_type: DrillType
    timestamp: float
    running_count: Optional[int] = None
    decks_remaining: Optional[float] = None
    true_count: Optional[int] = None


@dataclass(frozen=True)
class DrillResult:
    drill_type: DrillType
    accuracy: float
    speed: float
    cards_shown: int
    correct_answers: int
    incorrect_answers: int
    completed_at: datetime
    time_elapsed_ms: float

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["drill_type"] = self.drill_type.value
        d["completed_at"] = self.completed_at.isoformat()
        return d


def generate_true_count_question(rng: Optional[random.Random] = None) -> Dict[str, Union[int, float]]:
    """Running count in [-10, 9], decks remaining in [0.5, 5.4] by tenths."""
    rng = rng or random.Random()
    running_count = rng.randint(-10, 9)
    tenths = rng.randint(5, 54)
    # integer arithmetic: 3 / 0.6 must be exactly 5
    true_count = trunc_div(running_count * 10, tenths)
    return {
        "running_count": running_count,
        "decks_remaining": tenths / 10,
        "correct_true_count": true_count,
    }


def generate_bet_sizing_question(min_bet: float = DEFAULT_MIN_BET,
                                 rng: Optional[random.Random] = None) -> Dict[str, Union[int, float]]:
    rng = rng or random.Random()
    true_count = rng.randint(-2, 5)
    return {
        "true_count": true_count,
        "correct_bet": min_bet * bet_multiplier_for(true_count),
    }


class DrillEngine:
    def __init__(self, config: DrillConfig, rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = time.perf_counter):
        self.config = config
        self.rng = rng or random.Random()
        self.clock = clock
        self.counting = get_system(config.system)
        self.current_question: Optional[DrillQuestion] = None
        self.correct_answers = 0
        self.incorrect_answers = 0
        self.cards_shown = 0
        self.start_time: Optional[float] = None

    def _reset(self) -> None:
        self.current_question = None
        self.correct_answers = 0
        self.incorrect_answers = 0
        self.cards_shown = 0
        self.start_time = None

    def start_drill(self) -> None:
        self._reset()
        self.start_time = self.clock()
        logger.info("Drill started: %s (%s)", self.config.type.value, self.counting.name)

    # ----- Questions -----
    def _deal(self, n: int) -> Tuple[Card, ...]:
        shoe = Shoe(1, rng=self.rng)
        return tuple(shoe.pop() for _ in range(n))

    def _count(self, cards: Tuple[Card, ...]) -> int:
        engine = CardCountingEngine(self.config.system, total_decks=1)
        return engine.count_cards(cards)

    def generate_question(self) -> DrillQuestion:
        kind = self.config.type
        now = self.clock()
        if kind == DrillType.TRUE_COUNT_CALC:
            q = generate_true_count_question(self.rng)
            question = DrillQuestion(
                cards=(), correct_answer=q["correct_true_count"], question_type=kind, timestamp=now,
                running_count=q["running_count"], decks_remaining=q["decks_remaining"],
            )
        elif kind == DrillType.BET_SIZING:
            q = generate_bet_sizing_question(self.config.min_bet, self.rng)
            question = DrillQuestion(
                cards=(), correct_answer=q["correct_bet"], question_type=kind, timestamp=now,
                true_count=q["true_count"],
            )
        else:
            if kind == DrillType.RUNNING_COUNT:
                n = self.rng.randint(RUNNING_COUNT_MIN_CARDS, RUNNING_COUNT_MAX_CARDS)
            elif kind == DrillType.DECK_COUNTDOWN:
                n = CARDS_PER_DECK
            else:
                n = _FLASH_SIZES[kind]
            cards = self._deal(n)
            self.cards_shown += n
            question = DrillQuestion(cards=cards, correct_answer=self._count(cards), question_type=kind, timestamp=now)

        # replaces any unanswered question
        self.current_question = question
        return question

    def submit_answer(self, value: Union[int, float]) -> bool:
        if self.current_question is None:
            raise NoActiveQuestion("No active question: call generate_question() first")
        is_correct = CardCountingEngine.validate_count(value, self.current_question.correct_answer)
        self.current_question = None
        if is_correct:
            self.correct_answers += 1
        else:
            self.incorrect_answers += 1
        return is_correct

    # ----- Results -----
    def elapsed_ms(self) -> float:
        if self.start_time is None:
            return 0.0
        return (self.clock() - self.start_time) * 1000

    def get_results(self) -> DrillResult:
        elapsed = self.elapsed_ms()
        total = self.correct_answers + self.incorrect_answers
        return DrillResult(
            drill_type=self.config.type,
            accuracy=CardCountingEngine.calculate_accuracy(self.correct_answers, total),
            speed=CardCountingEngine.calculate_cards_per_minute(self.cards_shown, elapsed),
            cards_shown=self.cards_shown,
            correct_answers=self.correct_answers,
            incorrect_answers=self.incorrect_answers,
            completed_at=datetime.now(timezone.utc),
            time_elapsed_ms=elapsed,
        )

    def is_target_met(self) -> bool:
        results = self.get_results()
        return results.accuracy >= self.config.target_accuracy and results.speed >= self.config.target_speed
