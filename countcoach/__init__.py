"""Card counting trainer core: shoe, counting systems, drills and risk of ruin."""

from .cards import Card, Rank, Suit, create_deck, create_shoe, shuffle_cards
from .drill import DrillConfig, DrillEngine, DrillQuestion, DrillResult, DrillType
from .engine import CardCountingEngine
from .errors import CountCoachError, InvalidConfiguration, NoActiveQuestion, UnknownCountingSystem
from .risk import RiskParameters, SimulationResult, average_risk_of_ruin, run_shadow_session
from .shoe import Shoe
from .systems import COUNTING_SYSTEMS, CountingSystem, CountingSystemConfig, get_system

__all__ = [
    "Card", "Rank", "Suit", "create_deck", "create_shoe", "shuffle_cards",
    "DrillConfig", "DrillEngine", "DrillQuestion", "DrillResult", "DrillType",
    "CardCountingEngine",
    "CountCoachError", "InvalidConfiguration", "NoActiveQuestion", "UnknownCountingSystem",
    "RiskParameters", "SimulationResult", "average_risk_of_ruin", "run_shadow_session",
    "Shoe",
    "COUNTING_SYSTEMS", "CountingSystem", "CountingSystemConfig", "get_system",
]
