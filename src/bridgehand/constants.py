"""Centralized constants and scoring tables for a duplicate bridge deal.

Every tunable value lives here.  Import from this module instead of
hardcoding magic numbers elsewhere.

Usage::

    from bridgehand.constants import (
        BOOK,
        DOUBLED_UNDERTRICKS_VUL,
        GAME_BONUS_VUL,
    )
"""
from __future__ import annotations

# ---------------------------------------------------------------------------
#  Table geometry
# ---------------------------------------------------------------------------

NUM_SEATS: int = 4
CARDS_PER_SEAT: int = 13
DECK_SIZE: int = NUM_SEATS * CARDS_PER_SEAT  # 52
TRICKS_PER_DEAL: int = CARDS_PER_SEAT

BOOK: int = 6
"""Tricks declarer must take before any count towards the contract."""

MAX_LEVEL: int = 7

# ---------------------------------------------------------------------------
#  Record defaults
# ---------------------------------------------------------------------------

NO_BOARD: int = -1
NO_CLAIM: int = -1
"""Wire value of an absent claim in a hand record."""

DEFAULT_PLAYER_NAMES: tuple[str, ...] = ("South", "West", "North", "East")

# ---------------------------------------------------------------------------
#  Trick score (contract tricks, before doubling)
# ---------------------------------------------------------------------------

MAJOR_TRICK_VALUE: int = 30     # Hearts, Spades
MINOR_TRICK_VALUE: int = 20     # Clubs, Diamonds
NOTRUMP_FIRST_TRICK_EXTRA: int = 10
"""No-trump: 40 for the first trick, 30 after (level*30 + 10)."""

GAME_THRESHOLD: int = 100

# ---------------------------------------------------------------------------
#  Bonuses
# ---------------------------------------------------------------------------

PARTSCORE_BONUS: int = 50
GAME_BONUS_NONVUL: int = 300
GAME_BONUS_VUL: int = 500
SMALL_SLAM_BONUS_NONVUL: int = 500
SMALL_SLAM_BONUS_VUL: int = 750
GRAND_SLAM_BONUS_NONVUL: int = 1000
GRAND_SLAM_BONUS_VUL: int = 1500

INSULT_DOUBLED: int = 50
INSULT_REDOUBLED: int = 100

# ---------------------------------------------------------------------------
#  Overtricks
# ---------------------------------------------------------------------------

DOUBLED_OVERTRICK_NONVUL: int = 100
DOUBLED_OVERTRICK_VUL: int = 200
REDOUBLED_OVERTRICK_NONVUL: int = 200
REDOUBLED_OVERTRICK_VUL: int = 400

# ---------------------------------------------------------------------------
#  Undertricks
# ---------------------------------------------------------------------------

DOUBLED_UNDERTRICKS_VUL: tuple[int, ...] = (
    0, -200, -500, -800, -1100, -1400, -1700, -2000, -2300, -2600,
    -2900, -3200, -3500, -3800,
)
"""Doubled penalty indexed by tricks down (1..13); redoubled doubles it."""

DOUBLED_UNDERTRICKS_NONVUL: tuple[int, ...] = (
    0, -100, -300, -500, -800, -1100, -1400, -1700, -2000, -2300,
    -2600, -2900, -3200, -3500,
)

UNDOUBLED_UNDERTRICK_VUL: int = 100
UNDOUBLED_UNDERTRICK_NONVUL: int = 10
"""Per-trick undoubled penalty when not vulnerable (not the 50 of the printed laws)."""
