"""Duplicate scoring for a played contract.

Scores are signed and always from the declaring side's point of view:

  - Made contract: trick score (×2 doubled, ×4 redoubled), then either
    the part-score bonus or the game bonus (+ slam bonus), then the insult
    bonus and any overtricks.
  - Defeated contract: doubled / redoubled penalties come from fixed
    tables indexed by tricks down; undoubled penalties are a flat amount
    per undertrick.

All constants live in :mod:`bridgehand.constants`.
"""
from __future__ import annotations

from bridgehand.auction import Contract
from bridgehand.cards import Suit
from bridgehand.constants import (
    BOOK,
    DOUBLED_OVERTRICK_NONVUL,
    DOUBLED_OVERTRICK_VUL,
    DOUBLED_UNDERTRICKS_NONVUL,
    DOUBLED_UNDERTRICKS_VUL,
    GAME_BONUS_NONVUL,
    GAME_BONUS_VUL,
    GAME_THRESHOLD,
    GRAND_SLAM_BONUS_NONVUL,
    GRAND_SLAM_BONUS_VUL,
    INSULT_DOUBLED,
    INSULT_REDOUBLED,
    MAJOR_TRICK_VALUE,
    MINOR_TRICK_VALUE,
    NOTRUMP_FIRST_TRICK_EXTRA,
    PARTSCORE_BONUS,
    REDOUBLED_OVERTRICK_NONVUL,
    REDOUBLED_OVERTRICK_VUL,
    SMALL_SLAM_BONUS_NONVUL,
    SMALL_SLAM_BONUS_VUL,
    UNDOUBLED_UNDERTRICK_NONVUL,
    UNDOUBLED_UNDERTRICK_VUL,
)


def contract_result(level: int, tricks: int) -> int:
    """Tricks over (positive) or under (negative) the contract."""
    return tricks - (BOOK + level)


def trick_value(suit: Suit) -> int:
    """Value of one undoubled contract trick or overtrick in *suit*."""
    if suit in (Suit.CLUB, Suit.DIAMOND):
        return MINOR_TRICK_VALUE
    return MAJOR_TRICK_VALUE


def trick_score(level: int, suit: Suit) -> int:
    """Undoubled score for the contracted tricks."""
    score = level * trick_value(suit)
    if suit is Suit.NOTRUMP:
        score += NOTRUMP_FIRST_TRICK_EXTRA
    return score


def undertrick_penalty(
    down: int,
    *,
    vulnerable: bool,
    doubled: bool,
    redoubled: bool,
) -> int:
    """Negative score for going *down* tricks."""
    if doubled or redoubled:
        table = DOUBLED_UNDERTRICKS_VUL if vulnerable else DOUBLED_UNDERTRICKS_NONVUL
        score = table[down]
        if redoubled:
            score *= 2
        return score
    if vulnerable:
        return -down * UNDOUBLED_UNDERTRICK_VUL
    return -down * UNDOUBLED_UNDERTRICK_NONVUL


def made_score(
    level: int,
    suit: Suit,
    overtricks: int,
    *,
    vulnerable: bool,
    doubled: bool,
    redoubled: bool,
) -> int:
    """Positive score for making *level* in *suit* with *overtricks* extra."""
    score = trick_score(level, suit)
    if doubled:
        score *= 2
    elif redoubled:
        score *= 4

    if score < GAME_THRESHOLD:
        score += PARTSCORE_BONUS
    else:
        score += GAME_BONUS_VUL if vulnerable else GAME_BONUS_NONVUL
        if level == 7:
            score += GRAND_SLAM_BONUS_VUL if vulnerable else GRAND_SLAM_BONUS_NONVUL
        elif level == 6:
            score += SMALL_SLAM_BONUS_VUL if vulnerable else SMALL_SLAM_BONUS_NONVUL

    if doubled:
        score += INSULT_DOUBLED
    elif redoubled:
        score += INSULT_REDOUBLED

    if overtricks > 0:
        if doubled:
            per = DOUBLED_OVERTRICK_VUL if vulnerable else DOUBLED_OVERTRICK_NONVUL
        elif redoubled:
            per = REDOUBLED_OVERTRICK_VUL if vulnerable else REDOUBLED_OVERTRICK_NONVUL
        else:
            per = trick_value(suit)
        score += overtricks * per

    return score


def score_contract(contract: Contract, tricks: int, vulnerable: bool) -> int:
    """Signed duplicate score for declarer taking *tricks* in *contract*.

    A passed-out auction (no level) scores 0.
    """
    if contract.passed or contract.level is None or contract.suit is None:
        return 0
    result = contract_result(contract.level, tricks)
    if result < 0:
        return undertrick_penalty(
            -result,
            vulnerable=vulnerable,
            doubled=contract.doubled,
            redoubled=contract.redoubled,
        )
    return made_score(
        contract.level,
        contract.suit,
        result,
        vulnerable=vulnerable,
        doubled=contract.doubled,
        redoubled=contract.redoubled,
    )
