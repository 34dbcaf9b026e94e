"""Risk-of-ruin estimate from a simulated shadow session.

One call plays up to ``hands_count`` hands against a live 6-deck shoe. Hands
are not played out: four cards are dealt to move the shoe, then the outcome is
drawn from a win/push/loss split shifted by the current true count edge (and
by a mistake penalty at ``error_rate``). Bets follow a 1-8 unit spread.

The realized per-hand mean and variance feed the classic fixed-bet formula::

    RoR = exp(-2 * bankroll * mean / variance)

A non-positive mean is treated as certain ruin. Callers wanting a smoother
estimate average independent calls, see :func:`average_risk_of_ruin`.
"""

import logging
import math
import random
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

import numpy as np

from . import config
from .shoe import Shoe

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RiskParameters:
    """Calibration constants. Override with ``dataclasses.replace``.

    Attributes:
        house_edge: Baseline player edge at true count 0 (negative).
        advantage_per_tc: Edge gained per point of true count.
        cost_per_mistake: Edge lost on a hand where the player errs.
        base_win: Win probability of a neutral hand.
        base_push: Push probability, fixed regardless of edge.
        shoe_decks: Decks in the simulated shoe.
        reshuffle_below: Reshuffle once fewer cards than this remain.
        max_spread: Largest bet, in units, of the power-of-two ramp.
        perfect_edge: Long-run edge of an error-free counter (reporting only).
        perfect_variance: Per-hand variance of blackjack (reporting only).
    """
    house_edge: float = config.ROR_HOUSE_EDGE
    advantage_per_tc: float = config.ROR_ADVANTAGE_PER_TC
    cost_per_mistake: float = config.ROR_COST_PER_MISTAKE
    base_win: float = config.ROR_BASE_WIN
    base_push: float = config.ROR_BASE_PUSH
    shoe_decks: int = config.ROR_SHOE_DECKS
    reshuffle_below: int = config.ROR_RESHUFFLE_BELOW
    max_spread: int = config.ROR_MAX_SPREAD
    perfect_edge: float = config.ROR_PERFECT_EDGE
    perfect_variance: float = config.ROR_PERFECT_VARIANCE

    def realized_edge(self, error_rate: float) -> float:
        return self.perfect_edge - error_rate * self.cost_per_mistake


@dataclass(frozen=True)
class SimulationResult:
    probability_of_ruin: float
    expected_value: float
    variance: float
    hands_played: int
    ending_bankroll: float
    mean_per_hand: float = 0.0
    ruined: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def spread_units(true_count: float, max_spread: int = config.ROR_MAX_SPREAD) -> int:
    """1 unit below TC 1, then 2^floor(TC) capped at `max_spread`."""
    if true_count < 1:
        return 1
    return int(min(max_spread, 2 ** math.floor(true_count)))


def _hand_outcome(edge: float, params: RiskParameters, rng: random.Random) -> int:
    p_win = min(max(params.base_win + edge * 0.5, 0.0), 1.0 - params.base_push)
    r = rng.random()
    if r < p_win:
        return 1
    if r < p_win + params.base_push:
        return 0
    return -1


def ruin_probability(bankroll: float, mean_per_hand: float, variance: float) -> float:
    if bankroll <= 0 or mean_per_hand <= 0:
        return 1.0
    if variance <= 0:
        return 0.0
    ror = math.exp(-2 * bankroll * mean_per_hand / variance)
    return min(1.0, max(0.0, ror))


def run_shadow_session(
    bankroll: float,
    unit_bet: float,
    hands_count: int = config.ROR_DEFAULT_HANDS,
    error_rate: float = 0.0,
    params: Optional[RiskParameters] = None,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> SimulationResult:
    if bankroll < 0:
        raise ValueError(f"bankroll must be >= 0, got {bankroll}")
    if unit_bet <= 0:
        raise ValueError(f"unit_bet must be > 0, got {unit_bet}")
    if hands_count < 0:
        raise ValueError(f"hands_count must be >= 0, got {hands_count}")
    if not 0.0 <= error_rate <= 1.0:
        raise ValueError(f"error_rate must be within [0, 1], got {error_rate}")

    params = params or RiskParameters()
    rng = rng if rng is not None else random.Random(seed)
    shoe = Shoe(params.shoe_decks, rng=rng)

    current = float(bankroll)
    payouts: List[float] = []
    ruined = False

    for _ in range(int(hands_count)):
        if shoe.get_cards_remaining() < params.reshuffle_below:
            shoe.reset()

        # two player cards, dealer upcard and hole card
        for _ in range(4):
            shoe.pop()

        tc = shoe.get_true_count(shoe.decks_remaining())
        mistake = rng.random() < error_rate
        edge = params.house_edge + tc * params.advantage_per_tc - (params.cost_per_mistake if mistake else 0.0)

        result = _hand_outcome(edge, params, rng)
        pnl = result * spread_units(tc, params.max_spread) * unit_bet
        current += pnl
        payouts.append(pnl)

        if current <= 0:
            ruined = True
            logger.info("Bankroll ruined after %d hands (start=%s)", len(payouts), bankroll)
            break

    n = len(payouts)
    if n == 0:
        return SimulationResult(1.0, 0.0, 0.0, 0, current, 0.0, ruined)

    arr = np.asarray(payouts, dtype=float)
    total = float(arr.sum())
    mean = float(arr.mean())
    variance = float(arr.var())

    ror = ruin_probability(bankroll, mean, variance)
    logger.debug(
        "Shadow session: hands=%d ev=%.2f mean=%.4f var=%.4f ror=%.4f",
        n, total, mean, variance, ror,
    )
    return SimulationResult(
        probability_of_ruin=ror,
        expected_value=total,
        variance=variance,
        hands_played=n,
        ending_bankroll=current,
        mean_per_hand=mean,
        ruined=ruined,
    )


def average_risk_of_ruin(
    trials: int,
    bankroll: float,
    unit_bet: float,
    hands_count: int = config.ROR_DEFAULT_HANDS,
    error_rate: float = 0.0,
    params: Optional[RiskParameters] = None,
    seed: Optional[int] = None,
) -> float:
    """Mean ruin probability over `trials` independent sessions."""
    if trials <= 0:
        raise ValueError(f"trials must be > 0, got {trials}")
    total = 0.0
    for i in range(trials):
        s = None if seed is None else seed + i
        total += run_shadow_session(bankroll, unit_bet, hands_count, error_rate, params, seed=s).probability_of_ruin
    return total / trials
