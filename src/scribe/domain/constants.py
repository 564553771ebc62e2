"""Centralized constants for scribe.

Scheduling and scoring tables live here so both cores and the CLI import
from a single source of truth.
"""

# ---------- Spaced repetition ----------
DEFAULT_EASE_FACTOR = 2.5
DEFAULT_INTERVAL = 1  # days
MIN_EASE_FACTOR = 1.3
MIN_INTERVAL = 1  # days

# Ease change applied per rating
EASE_ADJUSTMENTS = {
    "again": -0.20,
    "hard": -0.15,
    "good": 0.0,
    "easy": 0.15,
}

# Multiplier on interval * ease for mature cards ("again" always resets)
INTERVAL_MODIFIERS = {
    "hard": 0.8,
    "good": 1.0,
    "easy": 1.3,
}

# Fixed steps used on the first review or while the interval is still <= 1 day
GRADUATION_STEPS = {
    "hard": 1,
    "good": 3,
    "easy": 4,
}

# ---------- Ranks ----------
RANK_SCORES = {
    "S": 1000,
    "A+": 950,
    "A": 900,
    "A-": 850,
    "B+": 800,
    "B": 750,
    "B-": 700,
    "C+": 650,
    "C": 600,
    "C-": 550,
    "D": 500,
}

# Lower bound (inclusive) of each band; anything below the last bound is "D"
RANK_THRESHOLDS = [
    (975, "S"),
    (925, "A+"),
    (875, "A"),
    (825, "A-"),
    (775, "B+"),
    (725, "B"),
    (675, "B-"),
    (625, "C+"),
    (575, "C"),
    (525, "C-"),
]

# ---------- Skill score ----------
SKILL_WEIGHTS = {
    "grammar": 0.30,
    "vocabulary": 0.25,
    "structure": 0.25,
    "content": 0.20,
}
DECAY_ALPHA = 0.3
TREND_MIN_WRITINGS = 3
TREND_WINDOW = 3
TREND_THRESHOLD = 30

# ---------- History ----------
DEFAULT_HISTORY_LIMIT = 50
