"""Trick-taking rules for bridge.

  - The leader may play any card.
  - Every other seat must follow the led suit if it can; a seat out of
    the led suit may discard or ruff freely.
  - The highest trump wins the trick; with no trump in it, the highest
    card of the led suit wins.  Cards of other suits never win.

In a no-trump contract ``trump`` is ``Suit.NOTRUMP`` and, since no card
belongs to that strain, only the led suit can win.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from bridgehand.cards import Card, Suit
from bridgehand.constants import NUM_SEATS
from bridgehand.seat import Seat


# ---------------------------------------------------------------------------
#  Trick
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Trick:
    """Up to four cards played in seat order starting at ``leader``."""

    leader: Seat
    cards: tuple[Card, ...]
    trump: Suit

    @property
    def led_suit(self) -> Optional[Suit]:
        return self.cards[0].suit if self.cards else None

    @property
    def is_complete(self) -> bool:
        return len(self.cards) == NUM_SEATS

    def seat_of(self, i: int) -> Seat:
        """Seat that played the *i*-th card of the trick."""
        return self.leader.next(i)

    @property
    def winning_seat(self) -> Optional[Seat]:
        """Seat that won the trick; ``None`` while it is incomplete."""
        if not self.is_complete:
            return None
        return self.seat_of(winning_index(self.cards, self.trump))

    @property
    def next_seat(self) -> Seat:
        """Who plays next: the winner once complete, else the next in turn."""
        winner = self.winning_seat
        if winner is not None:
            return winner
        return self.seat_of(len(self.cards))

    def plays(self) -> list[tuple[Seat, Card]]:
        return [(self.seat_of(i), c) for i, c in enumerate(self.cards)]


# ---------------------------------------------------------------------------
#  Trick resolution
# ---------------------------------------------------------------------------


def winning_index(cards: Sequence[Card], trump: Suit) -> int:
    """Index into *cards* of the card currently winning the trick.

    Works on partial tricks too, which makes it usable for "who is
    winning so far" queries; a trick's winner is only final once four
    cards are present.
    """
    if not cards:
        raise ValueError("Cannot determine winner of an empty trick")

    led_suit = cards[0].suit

    trumps = [i for i, c in enumerate(cards) if c.suit == trump]
    if trumps:
        return max(trumps, key=lambda i: cards[i].rank)

    followers = [i for i, c in enumerate(cards) if c.suit == led_suit]
    return max(followers, key=lambda i: cards[i].rank)


def build_tricks(
    play: Sequence[Card],
    opening_leader: Seat,
    trump: Suit,
) -> List[Trick]:
    """Split the play sequence into consecutive tricks of four.

    Each completed trick's winner leads the next; the last trick may be
    incomplete.
    """
    leader = opening_leader
    tricks: List[Trick] = []
    for i in range(0, len(play), NUM_SEATS):
        trick = Trick(leader, tuple(play[i:i + NUM_SEATS]), trump)
        winner = trick.winning_seat
        if winner is not None:
            leader = winner
        tricks.append(trick)
    return tricks


# ---------------------------------------------------------------------------
#  Legal plays
# ---------------------------------------------------------------------------


def legal_plays(holding: Sequence[Card], trick: Optional[Trick]) -> List[Card]:
    """Cards from *holding* that may be played into *trick*.

    ``trick`` is the trick in progress, or ``None`` / a complete trick
    when the player is on lead.
    """
    if trick is None or trick.is_complete or not trick.cards:
        return list(holding)
    led_suit = trick.led_suit
    same_suit = [c for c in holding if c.suit == led_suit]
    if same_suit:
        return same_suit
    return list(holding)


def follows_suit(holding: Sequence[Card], card: Card, trick: Optional[Trick]) -> bool:
    """Is playing *card* from *holding* into *trick* legal?"""
    if card not in holding:
        return False
    return card in legal_plays(holding, trick)
