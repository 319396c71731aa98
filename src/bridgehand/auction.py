"""Bridge auction: calls, contract resolution and call legality.

A call is one of two shapes:

  - ``SuitBid(level, suit)``: level 1..7 in one of the five strains
  - ``Call.PASS`` / ``Call.DOUBLE`` / ``Call.REDOUBLE``: special calls

The contract is never stored: :func:`resolve_contract` recomputes it from
the full call history and the dealer every time it is needed, so a
truncated history (replay, undo) can never see stale state.

Termination
-----------
The auction is complete once four calls have been made and either

  - all four are Pass (the deal is *passed out*), or
  - the last three calls are Pass and some earlier call was not.

Declarer
--------
Of the partnership that made the final suit bid, declarer is whichever
partner *first* named the final strain during the auction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Optional, Sequence, Union

from bridgehand.cards import ALL_SUITS, Suit
from bridgehand.constants import MAX_LEVEL
from bridgehand.seat import Seat


# ---------------------------------------------------------------------------
#  Call values
# ---------------------------------------------------------------------------


class Call(str, Enum):
    """The three calls that carry no level or strain."""

    PASS = "Pass"
    DOUBLE = "X"
    REDOUBLE = "XX"

    def __str__(self) -> str:
        return self.value

    def to_json(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class SuitBid:
    """A bid of *level* tricks over book in *suit*.

    ``index`` orders all 35 suit bids: level first, strain as tiebreak
    (1♣ = 0 … 7NT = 34).
    """

    level: int
    suit: Suit

    def __post_init__(self) -> None:
        if not 1 <= self.level <= MAX_LEVEL:
            raise ValueError(f"Bid level must be 1..{MAX_LEVEL}, got {self.level}")
        if not isinstance(self.suit, Suit):
            raise ValueError(f"Bid suit must be a Suit, got {self.suit!r}")

    @property
    def index(self) -> int:
        return (self.level - 1) * len(ALL_SUITS) + int(self.suit)

    def beats(self, other: SuitBid) -> bool:
        """Does this bid strictly outrank *other*?"""
        return self.index > other.index

    def label(self) -> str:
        """Display form with a suit glyph, e.g. ``'4♠'``."""
        return f"{self.level}{self.suit.glyph}"

    def __str__(self) -> str:
        return f"{self.level}{self.suit.code}"

    def to_json(self) -> str:
        return str(self)


Bid = Union[SuitBid, Call]

ALL_SUIT_BIDS: tuple[SuitBid, ...] = tuple(
    SuitBid(level, suit)
    for level in range(1, MAX_LEVEL + 1)
    for suit in ALL_SUITS
)


def parse_call(text: str) -> Bid:
    """Parse a call string: ``"Pass"``, ``"X"``, ``"XX"`` or ``"<level><suit>"``."""
    token = text.strip()
    for call in Call:
        if token == call.value:
            return call
    if len(token) < 2 or not token[0].isdigit():
        raise ValueError(f"Can't make a call from string: {text!r}")
    level = int(token[0])
    if not 1 <= level <= MAX_LEVEL:
        raise ValueError(f"Can't make a call from string: {text!r}")
    try:
        suit = Suit.from_string(token[1:])
    except ValueError:
        raise ValueError(f"Can't make a call from string: {text!r}") from None
    return SuitBid(level, suit)


# ---------------------------------------------------------------------------
#  Contract
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Contract:
    """Contract as resolved from a call history.

    ``level`` / ``suit`` / ``declarer`` are ``None`` until a suit bid has
    been made.  ``complete`` and ``passed`` describe the auction itself.
    """

    level: Optional[int] = None
    suit: Optional[Suit] = None
    bidder: Optional[Seat] = None
    declarer: Optional[Seat] = None
    doubled: bool = False
    redoubled: bool = False
    complete: bool = False
    passed: bool = False

    @property
    def bid(self) -> Optional[SuitBid]:
        if self.level is None or self.suit is None:
            return None
        return SuitBid(self.level, self.suit)

    @property
    def label(self) -> str:
        """``'3NT South'``, ``'4S North Doubled'``, ``'Passed out'``; empty while bidding."""
        if not self.complete:
            return ""
        bid = self.bid
        if bid is None:
            return "Passed out"
        result = f"{bid} {self.declarer}"
        if self.doubled:
            return result + " Doubled"
        if self.redoubled:
            return result + " Redoubled"
        return result


def _auction_complete(calls: Sequence[Bid]) -> tuple[bool, bool]:
    """Return ``(complete, passed)`` for a call history."""
    passed = len(calls) == 4 and all(c is Call.PASS for c in calls)
    complete = passed or (
        len(calls) >= 4 and all(c is Call.PASS for c in calls[-3:])
    )
    return complete, passed


def find_declarer(
    calls: Sequence[Bid],
    dealer: Seat,
    suit: Suit,
    bidder: Seat,
) -> Seat:
    """First member of *bidder*'s partnership to have named *suit*."""
    partner = bidder.partner()
    seat = dealer
    for call in calls:
        if isinstance(call, SuitBid) and call.suit == suit:
            if seat == bidder:
                return bidder
            if seat == partner:
                return partner
        seat = seat.next()
    # The final bid itself names the suit, so the scan always finds it.
    raise AssertionError(f"{bidder} never bid {suit.name}")


def resolve_contract(calls: Sequence[Bid], dealer: Seat) -> Contract:
    """Fold the call history into a :class:`Contract`.

    Pure function of ``(calls, dealer)``; never mutates anything.
    """
    highest: Optional[SuitBid] = None
    bidder: Optional[Seat] = None
    doubled = False
    redoubled = False

    seat = dealer
    for call in calls:
        if isinstance(call, SuitBid):
            highest = call
            bidder = seat
            doubled = False
            redoubled = False
        elif call is Call.DOUBLE:
            doubled = True
        elif call is Call.REDOUBLE:
            redoubled = True
            doubled = False
        seat = seat.next()

    complete, passed = _auction_complete(calls)

    if highest is None or bidder is None:
        return Contract(complete=complete, passed=passed)

    return Contract(
        level=highest.level,
        suit=highest.suit,
        bidder=bidder,
        declarer=find_declarer(calls, dealer, highest.suit, bidder),
        doubled=doubled,
        redoubled=redoubled,
        complete=complete,
        passed=passed,
    )


# ---------------------------------------------------------------------------
#  Auction state
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Auction:
    """Immutable view over a call history with its legality queries.

    Derived values are memoised per instance; a new call always produces
    a new ``Auction``.
    """

    calls: tuple[Bid, ...]
    dealer: Seat

    @cached_property
    def contract(self) -> Contract:
        return resolve_contract(self.calls, self.dealer)

    @cached_property
    def highest_bid(self) -> Optional[SuitBid]:
        for call in reversed(self.calls):
            if isinstance(call, SuitBid):
                return call
        return None

    @property
    def complete(self) -> bool:
        return self.contract.complete

    @property
    def passed(self) -> bool:
        return self.contract.passed

    @property
    def declarer(self) -> Optional[Seat]:
        return self.contract.declarer

    @property
    def next_caller(self) -> Seat:
        return self.dealer.next(len(self.calls))

    def extend(self, call: Bid) -> Auction:
        """Append *call* without any legality check."""
        return Auction(self.calls + (call,), self.dealer)

    # ---- Doubling eligibility ----

    @property
    def pending_opponent_call(self) -> Optional[Bid]:
        """The last non-Pass call made by the side not on turn, if any.

        That is the previous call when it is not a Pass, or the call three
        back when it was followed by two Passes.
        """
        calls = self.calls
        if calls and calls[-1] is not Call.PASS:
            return calls[-1]
        if (
            len(calls) >= 3
            and calls[-1] is Call.PASS
            and calls[-2] is Call.PASS
            and calls[-3] is not Call.PASS
        ):
            return calls[-3]
        return None

    @property
    def can_double(self) -> bool:
        return isinstance(self.pending_opponent_call, SuitBid)

    @property
    def can_redouble(self) -> bool:
        return self.pending_opponent_call is Call.DOUBLE

    # ---- Legal calls ----

    def valid_calls(self) -> list[Bid]:
        """Every call that :meth:`validate_next` would accept."""
        calls: list[Bid] = [Call.PASS]
        if self.can_double:
            calls.append(Call.DOUBLE)
        if self.can_redouble:
            calls.append(Call.REDOUBLE)
        highest = self.highest_bid
        if highest is None:
            return calls + list(ALL_SUIT_BIDS)
        return calls + list(ALL_SUIT_BIDS[highest.index + 1:])

    @property
    def valid_bid_level(self) -> int:
        """Lowest level at which a suit bid is still legal (8 after 7NT)."""
        highest = self.highest_bid
        if highest is None:
            return 1
        nxt = highest.index + 1
        if nxt >= len(ALL_SUIT_BIDS):
            return MAX_LEVEL + 1
        return ALL_SUIT_BIDS[nxt].level

    def validate_next(self, call: Bid) -> bool:
        """Is *call* a legal next call?  Turn order is the caller's concern."""
        if call is Call.PASS:
            return True
        if call is Call.DOUBLE:
            return self.can_double
        if call is Call.REDOUBLE:
            return self.can_redouble
        highest = self.highest_bid
        if highest is None:
            return True
        return call.beats(highest)
