"""
Tests for the parallel risk-of-ruin CLI
Run with: pytest tests/test_simulate_ror.py -v
"""

import pandas as pd

import simulate_ror


class TestSimulateChunk:
    def test_chunk_size(self):
        results = simulate_ror.simulate_chunk(3, 200, 1, 100, 0.0, seed=1)
        assert len(results) == 3
        assert all(0 < r.hands_played <= 100 for r in results)

    def test_seed_offsets_differ(self):
        a, b = simulate_ror.simulate_chunk(2, 200, 1, 200, 0.0, seed=1)
        assert a != b


class TestCli:
    def test_parse_args(self):
        args = simulate_ror.parse_args(["--bankroll", "250", "--trials", "4", "--seed", "9"])
        assert args.bankroll == 250
        assert args.trials == 4
        assert args.unit_bet == 1.0

    def test_main_writes_csv(self, tmp_path, capsys):
        out = tmp_path / "ror.csv"
        code = simulate_ror.main([
            "--bankroll", "100", "--hands", "100", "--trials", "3",
            "--workers", "2", "--seed", "5", "--out", str(out),
        ])
        assert code == 0
        df = pd.read_csv(out)
        assert len(df) == 3
        assert "ror_mean" in capsys.readouterr().out

    def test_rejects_zero_trials(self):
        assert simulate_ror.main(["--bankroll", "100", "--trials", "0", "--out", ""]) == 2
