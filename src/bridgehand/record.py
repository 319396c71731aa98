"""Hand record shape and token parsing.

A hand travels as a plain JSON-compatible dict::

    {
        "board": 1,
        "dealer": "North",
        "vulnerability": "NS",
        "deal": [ ...52 card ids... ],
        "bidding": ["1NT", "Pass", "3NT", "Pass", "Pass", "Pass"],
        "play": [12, 3, ...],
        "players": ["Ann", "Bob", "Cat", "Dan"],
        "claim": 9,
    }

Every field is optional.  Malformed tokens raise ``ValueError``.
"""

from __future__ import annotations

from typing import Any, List, Optional, TypedDict

from bridgehand.auction import Bid, parse_call
from bridgehand.cards import Card
from bridgehand.constants import DEFAULT_PLAYER_NAMES, NO_CLAIM, NUM_SEATS


class HandJson(TypedDict, total=False):
    board: int
    dealer: str
    vulnerability: str
    deal: List[int]
    bidding: List[str]
    play: List[int]
    players: List[str]
    claim: int


def _plain_int(obj: Any) -> bool:
    return isinstance(obj, int) and not isinstance(obj, bool)


def card_from_json(obj: Any) -> Card:
    if not _plain_int(obj):
        raise ValueError(f"Invalid card: {obj!r}")
    return Card(obj)


def call_from_json(obj: Any) -> Bid:
    if not isinstance(obj, str):
        raise ValueError(f"Invalid call: {obj!r}")
    return parse_call(obj)


def players_from_json(names: Optional[List[str]]) -> tuple[str, ...]:
    """Overlay up to four supplied names onto the default seat names."""
    if names is None:
        return DEFAULT_PLAYER_NAMES
    if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
        raise ValueError(f"Players must be a list of names, got {names!r}")
    if len(names) > NUM_SEATS:
        raise ValueError(f"At most {NUM_SEATS} players, got {len(names)}")
    return tuple(names) + DEFAULT_PLAYER_NAMES[len(names):]


def claim_from_json(obj: Any) -> Optional[int]:
    """``None`` / ``-1`` mean no claim."""
    if obj is None:
        return None
    if not _plain_int(obj):
        raise ValueError(f"Invalid claim: {obj!r}")
    if obj == NO_CLAIM:
        return None
    return obj
