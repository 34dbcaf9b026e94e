"""Registry of the supported card counting systems.

Each system maps every rank to a point value. Balanced systems net to zero
over a full deck, so a true count can be taken directly; the unbalanced KO
count nets to +4 per deck and is read against its expected end-of-shoe value.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Tuple, Union

from .cards import RANKS, Rank
from .errors import UnknownCountingSystem


class CountingSystem(str, Enum):
    HI_LO = "hi_lo"
    KO = "ko"
    HI_OPT_I = "hi_opt_1"
    HI_OPT_II = "hi_opt_2"
    OMEGA_II = "omega_2"
    ZEN = "zen"


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


@dataclass(frozen=True)
class CountingSystemConfig:
    name: str
    system: CountingSystem
    values: Mapping[Rank, int]
    is_balanced: bool
    difficulty: Difficulty
    description: str = ""

    def value(self, rank: Rank) -> int:
        return self.values[rank]

    def deck_total(self) -> int:
        """Net count of one complete deck (4 cards of every rank)."""
        return sum(v * 4 for v in self.values.values())

    def expected_final_count(self, decks: int = 1) -> int:
        """Running count after every card of a `decks`-deck shoe has been seen."""
        return self.deck_total() * decks


def _values(two, three, four, five, six, seven, eight, nine, ten, ace) -> Mapping[Rank, int]:
    # 10/J/Q/K always share a value
    table = dict(zip(RANKS[:8], (two, three, four, five, six, seven, eight, nine)))
    for r in (Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING):
        table[r] = ten
    table[Rank.ACE] = ace
    return MappingProxyType(table)


_REGISTRY: List[CountingSystemConfig] = [
    CountingSystemConfig(
        name="Hi-Lo",
        system=CountingSystem.HI_LO,
        values=_values(1, 1, 1, 1, 1, 0, 0, 0, -1, -1),
        is_balanced=True,
        difficulty=Difficulty.BEGINNER,
        description="The most popular and easiest card counting system. Perfect for beginners.",
    ),
    CountingSystemConfig(
        name="Knock-Out (KO)",
        system=CountingSystem.KO,
        values=_values(1, 1, 1, 1, 1, 1, 0, 0, -1, -1),
        is_balanced=False,
        difficulty=Difficulty.BEGINNER,
        description="Unbalanced system with no true count conversion needed.",
    ),
    CountingSystemConfig(
        name="Hi-Opt I",
        system=CountingSystem.HI_OPT_I,
        values=_values(0, 1, 1, 1, 1, 0, 0, 0, -1, 0),
        is_balanced=True,
        difficulty=Difficulty.INTERMEDIATE,
        description="More accurate than Hi-Lo, requires side-counting aces for optimal play.",
    ),
    CountingSystemConfig(
        name="Hi-Opt II",
        system=CountingSystem.HI_OPT_II,
        values=_values(1, 1, 2, 2, 1, 1, 0, 0, -2, 0),
        is_balanced=True,
        difficulty=Difficulty.ADVANCED,
        description="Multi-level system with ace side count. High accuracy, high difficulty.",
    ),
    CountingSystemConfig(
        name="Omega II",
        system=CountingSystem.OMEGA_II,
        values=_values(1, 1, 2, 2, 2, 1, 0, -1, -2, 0),
        is_balanced=True,
        difficulty=Difficulty.EXPERT,
        description="Highly accurate multi-level system. Requires significant practice.",
    ),
    CountingSystemConfig(
        name="Zen Count",
        system=CountingSystem.ZEN,
        values=_values(1, 1, 2, 2, 2, 1, 0, 0, -2, -1),
        is_balanced=True,
        difficulty=Difficulty.ADVANCED,
        description="Balanced multi-level system with good betting correlation.",
    ),
]

COUNTING_SYSTEMS: Mapping[CountingSystem, CountingSystemConfig] = MappingProxyType(
    {cfg.system: cfg for cfg in _REGISTRY}
)

# (true count, bet multiplier): TC <= 1 -> 1x, 2 -> 2x, 3 -> 4x, >= 4 -> 8x
HI_LO_BETTING_STRATEGY: Tuple[Tuple[int, int], ...] = ((1, 1), (2, 2), (3, 4), (4, 8))


def bet_multiplier_for(true_count: int) -> int:
    """Step function of the Hi-Lo betting ramp. Never below the table minimum."""
    multiplier = 1
    for tc, mult in HI_LO_BETTING_STRATEGY:
        if true_count >= tc:
            multiplier = mult
    return multiplier


def get_system(system_id: Union[CountingSystem, str]) -> CountingSystemConfig:
    try:
        return COUNTING_SYSTEMS[CountingSystem(system_id)]
    except (ValueError, KeyError):
        raise UnknownCountingSystem(f"Unknown counting system: {system_id!r}") from None

