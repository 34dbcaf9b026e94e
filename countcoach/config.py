# config.py
# ---------------- CONFIG ----------------
CARDS_PER_DECK = 52
MIN_DECKS = 1
MAX_DECKS = 8
DEFAULT_ENGINE_DECKS = 6

# Floor for the decks-remaining estimate, keeps the true count bounded near the end of a shoe
MIN_DECKS_REMAINING = 0.5

# Risk of ruin calibration (units of one base bet)
ROR_SHOE_DECKS = 6
ROR_RESHUFFLE_BELOW = 15
ROR_HOUSE_EDGE = -0.005
ROR_ADVANTAGE_PER_TC = 0.005
ROR_COST_PER_MISTAKE = 0.005
ROR_BASE_WIN = 0.43
ROR_BASE_PUSH = 0.09
ROR_MAX_SPREAD = 8
ROR_PERFECT_EDGE = 0.01
ROR_PERFECT_VARIANCE = 1.33
ROR_DEFAULT_HANDS = 10_000

# Drill question ranges
RUNNING_COUNT_MIN_CARDS = 10
RUNNING_COUNT_MAX_CARDS = 20
DEFAULT_MIN_BET = 10
