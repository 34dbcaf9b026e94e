import math
from typing import Iterable, Mapping

import numpy as np
import pandas as pd

from .cards import RANKS
from .risk import SimulationResult
from .systems import COUNTING_SYSTEMS


# ------------------- Counting systems -------------------
def systems_table() -> pd.DataFrame:
    """One row per registered system, one column per rank plus metadata."""
    rows = []
    for cfg in COUNTING_SYSTEMS.values():
        row = {"System": cfg.name, "Id": cfg.system.value}
        for rank in RANKS:
            row[rank.value] = cfg.values[rank]
        row["Balanced"] = cfg.is_balanced
        row["Deck total"] = cfg.deck_total()
        row["Difficulty"] = cfg.difficulty.value
        rows.append(row)
    return pd.DataFrame(rows)


# ------------------- Risk of ruin trials -------------------
def summarize_trials(results: Iterable[SimulationResult]) -> pd.DataFrame:
    rows = []
    for idx, r in enumerate(results, start=1):
        row = {"trial": idx}
        row.update(r.to_dict())
        rows.append(row)
    return pd.DataFrame(rows)


def _mean_std_ci(x: np.ndarray):
    if x.size == 0:
        return 0.0, 0.0, 0.0
    m = float(np.mean(x))
    s = float(np.std(x, ddof=1)) if x.size > 1 else 0.0
    # approx 95% CI (normal): m ± 1.96 * s / sqrt(n)
    half = 1.96 * s / math.sqrt(x.size)
    return m, s, half


def trial_summary(df: pd.DataFrame) -> Mapping[str, float]:
    ror = df["probability_of_ruin"].to_numpy(dtype=float) if len(df) else np.array([], dtype=float)
    ev = df["expected_value"].to_numpy(dtype=float) if len(df) else np.array([], dtype=float)
    m_ror, s_ror, h_ror = _mean_std_ci(ror)
    m_ev, s_ev, h_ev = _mean_std_ci(ev)
    return {
        "trials": int(len(df)),
        "ror_mean": m_ror,
        "ror_std": s_ror,
        "ror_ci95": h_ror,
        "ev_mean": m_ev,
        "ev_std": s_ev,
        "ev_ci95": h_ev,
        "ruined_share": float(df["ruined"].mean()) if len(df) else 0.0,
    }
