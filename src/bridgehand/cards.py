"""Card definitions for contract bridge.

A card is an integer id in ``[0, 52)``:
  - suit  = id // 13, in the order Club, Diamond, Heart, Spade
  - rank  = id % 13, where 0 is the Two and 12 is the Ace

Suits double as bidding strains.  ``Suit.NOTRUMP`` ranks above the four
playing suits but no card ever belongs to it.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional

from bridgehand.constants import CARDS_PER_SEAT, DECK_SIZE


# ---------------------------------------------------------------------------
#  Suits / strains (IntEnum values encode bidding rank)
# ---------------------------------------------------------------------------


class Suit(IntEnum):
    CLUB = 0
    DIAMOND = 1
    HEART = 2
    SPADE = 3
    NOTRUMP = 4

    @property
    def code(self) -> str:
        """Short code used in call strings: C, D, H, S, NT."""
        return _SUIT_CODE[self]

    @property
    def glyph(self) -> str:
        return _SUIT_GLYPH[self]

    @property
    def is_major(self) -> bool:
        return self in (Suit.HEART, Suit.SPADE)

    @classmethod
    def from_string(cls, text: str) -> Suit:
        """Parse a short code (``"S"``, ``"NT"``) or a glyph (``"♠"``)."""
        suit = _SUIT_BY_TOKEN.get(text.strip().upper())
        if suit is None:
            raise ValueError(f"Can't make a suit from string: {text!r}")
        return suit


ALL_SUITS: tuple[Suit, ...] = tuple(Suit)

PLAYING_SUITS: tuple[Suit, ...] = (Suit.CLUB, Suit.DIAMOND, Suit.HEART, Suit.SPADE)

_SUIT_CODE: dict[Suit, str] = {
    Suit.CLUB: "C", Suit.DIAMOND: "D",
    Suit.HEART: "H", Suit.SPADE: "S",
    Suit.NOTRUMP: "NT",
}

_SUIT_GLYPH: dict[Suit, str] = {
    Suit.CLUB: "♣", Suit.DIAMOND: "♦",
    Suit.HEART: "♥", Suit.SPADE: "♠",
    Suit.NOTRUMP: "NT",
}

_SUIT_BY_TOKEN: dict[str, Suit] = {
    **{code: s for s, code in _SUIT_CODE.items()},
    **{glyph: s for s, glyph in _SUIT_GLYPH.items()},
}


# ---------------------------------------------------------------------------
#  Card
# ---------------------------------------------------------------------------

_RANK_CHARS = "23456789TJQKA"


@dataclass(frozen=True, slots=True, order=True)
class Card:
    id: int

    def __post_init__(self) -> None:
        if not isinstance(self.id, int) or isinstance(self.id, bool):
            raise ValueError(f"Card id must be an int, got {self.id!r}")
        if not 0 <= self.id < DECK_SIZE:
            raise ValueError(f"Card id must be in [0, {DECK_SIZE}), got {self.id}")

    @property
    def suit(self) -> Suit:
        return PLAYING_SUITS[self.id // CARDS_PER_SEAT]

    @property
    def rank(self) -> int:
        """0 (Two) .. 12 (Ace)."""
        return self.id % CARDS_PER_SEAT

    @property
    def rank_str(self) -> str:
        return _RANK_CHARS[self.rank]

    def short(self) -> str:
        """Human-readable short label, e.g. 'TH', 'AS'."""
        return f"{self.rank_str}{self.suit.code}"

    def __str__(self) -> str:
        return f"{self.rank_str}{self.suit.glyph}"

    def __repr__(self) -> str:
        return f"Card({self.short()})"

    def to_json(self) -> int:
        return self.id

    @classmethod
    def of(cls, suit: Suit, rank: int) -> Card:
        """Build a card from a playing suit and a rank index (0 = Two)."""
        if suit is Suit.NOTRUMP:
            raise ValueError("No card belongs to NoTrump")
        return cls(int(suit) * CARDS_PER_SEAT + rank)


# ---------------------------------------------------------------------------
#  Deck
# ---------------------------------------------------------------------------


def make_deck() -> List[Card]:
    """Create the full 52-card deck in id order."""
    return [Card(i) for i in range(DECK_SIZE)]


def shuffled_deal(seed: Optional[int] = None) -> List[Card]:
    """Shuffle a fresh deck.

    The result is a deal: holdings are consecutive 13-card slices in seat
    order South, West, North, East.
    """
    rng = random.Random(seed)
    deck = make_deck()
    rng.shuffle(deck)
    return deck
