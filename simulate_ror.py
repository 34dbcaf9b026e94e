# simulate_ror.py
import argparse
import logging
import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import List, Optional

import pandas as pd
from tqdm import tqdm

from countcoach.risk import SimulationResult, run_shadow_session
from countcoach.tables import summarize_trials, trial_summary

logger = logging.getLogger("simulate_ror")

# ---------------- CONFIG ----------------
RESULTS_FILE = os.path.join(os.getcwd(), "ror_results.csv")
N_TRIALS = 20
N_WORKERS = os.cpu_count() or 4


# ---------------- SIMULATION ----------------
def simulate_chunk(n_trials: int, bankroll: float, unit_bet: float, hands: int,
                   error_rate: float, seed: Optional[int]) -> List[SimulationResult]:
    """Each worker owns its shoes; seeds are offset per trial."""
    results = []
    for i in range(n_trials):
        s = None if seed is None else seed + i
        results.append(run_shadow_session(bankroll, unit_bet, hands, error_rate, seed=s))
    return results


def simulate_trials_parallel(n_trials: int, bankroll: float, unit_bet: float, hands: int,
                             error_rate: float, seed: Optional[int] = None,
                             workers: int = N_WORKERS) -> List[SimulationResult]:
    workers = max(1, min(workers, n_trials))
    chunk_size = n_trials // workers
    chunks = [chunk_size] * workers
    chunks[-1] += n_trials % workers

    results: List[SimulationResult] = []
    with ProcessPoolExecutor(max_workers=workers) as executor:
        futures = []
        offset = 0
        for c in chunks:
            if c <= 0:
                continue
            s = None if seed is None else seed + offset
            futures.append(executor.submit(simulate_chunk, c, bankroll, unit_bet, hands, error_rate, s))
            offset += c
        for f in tqdm(as_completed(futures), total=len(futures), desc=f"Simulating {n_trials} trials", ncols=80):
            results.extend(f.result())
    return results


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Average risk of ruin over independent shadow sessions")
    p.add_argument("--bankroll", type=float, required=True, help="Starting bankroll in units")
    p.add_argument("--unit-bet", type=float, default=1.0)
    p.add_argument("--hands", type=int, default=10_000, help="Hands per trial")
    p.add_argument("--error-rate", type=float, default=0.0, help="Share of hands misplayed (0-1)")
    p.add_argument("--trials", type=int, default=N_TRIALS)
    p.add_argument("--workers", type=int, default=N_WORKERS)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--out", default=RESULTS_FILE, help="CSV file for per-trial rows ('' to skip)")
    p.add_argument("--log-level", default="WARNING")
    return p.parse_args(argv)


# ---------------- MAIN ----------------
def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.trials <= 0:
        logger.error("--trials must be positive")
        return 2

    results = simulate_trials_parallel(args.trials, args.bankroll, args.unit_bet, args.hands,
                                       args.error_rate, args.seed, args.workers)
    df = summarize_trials(results)
    summary = trial_summary(df)

    if args.out:
        df.to_csv(args.out, index=False)
        logger.info("Wrote %d trials to %s", len(df), args.out)

    print(pd.Series(summary).to_string(), flush=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
