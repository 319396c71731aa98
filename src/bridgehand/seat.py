"""Seats, partnerships and vulnerability.

Seats rotate South → West → North → East → South.  The integer value of
a seat is its position in that rotation, which is also the order in
which the 52-card deal is split into 13-card holdings.
"""

from __future__ import annotations

from enum import Enum

from bridgehand.constants import NUM_SEATS


class Seat(Enum):
    SOUTH = 0
    WEST = 1
    NORTH = 2
    EAST = 3

    def next(self, num: int = 1) -> Seat:
        """The seat *num* places further round the table."""
        return Seat((self.value + num) % NUM_SEATS)

    def partner(self) -> Seat:
        return self.next(2)

    def is_team(self, other: Seat) -> bool:
        """Do *self* and *other* sit in the same partnership?"""
        return self == other or self.partner() == other

    @property
    def char(self) -> str:
        return self.name[0]

    def __str__(self) -> str:
        return self.name.title()

    def to_json(self) -> str:
        return str(self)

    @classmethod
    def from_string(cls, text: str) -> Seat:
        """Parse ``"North"`` / ``"N"`` (any case) into a Seat."""
        if not isinstance(text, str):
            raise ValueError(f"Can't make a seat from: {text!r}")
        token = text.strip().upper()
        for seat in cls:
            if token in (seat.name, seat.char):
                return seat
        raise ValueError(f"Can't make a seat from string: {text!r}")


ALL_SEATS: tuple[Seat, ...] = tuple(Seat)

NORTH_SOUTH: frozenset[Seat] = frozenset({Seat.NORTH, Seat.SOUTH})
EAST_WEST: frozenset[Seat] = frozenset({Seat.EAST, Seat.WEST})


class Vulnerability(str, Enum):
    NONE = "None"
    NS = "NS"
    EW = "EW"
    BOTH = "Both"

    def is_vulnerable(self, seat: Seat) -> bool:
        if self is Vulnerability.BOTH:
            return True
        if self is Vulnerability.NS:
            return seat in NORTH_SOUTH
        if self is Vulnerability.EW:
            return seat in EAST_WEST
        return False

    def __str__(self) -> str:
        return self.value

    def to_json(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, text: str) -> Vulnerability:
        if not isinstance(text, str):
            raise ValueError(f"Can't make a vulnerability from: {text!r}")
        key = text.strip().upper()
        vul = _VUL_ALIASES.get(key)
        if vul is None:
            raise ValueError(f"Can't make a vulnerability from string: {text!r}")
        return vul

    @classmethod
    def for_board(cls, board: int) -> Vulnerability:
        """Standard 16-board duplicate rotation (board 1 = None, 2 = NS, …)."""
        bn = board - 1
        return _VUL_CYCLE[(bn // 4 + bn % 4) % 4]


_VUL_CYCLE: tuple[Vulnerability, ...] = (
    Vulnerability.NONE,
    Vulnerability.NS,
    Vulnerability.EW,
    Vulnerability.BOTH,
)

_VUL_ALIASES: dict[str, Vulnerability] = {
    "NONE": Vulnerability.NONE,
    "-": Vulnerability.NONE,
    "LOVE": Vulnerability.NONE,
    "NS": Vulnerability.NS,
    "N-S": Vulnerability.NS,
    "EW": Vulnerability.EW,
    "E-W": Vulnerability.EW,
    "BOTH": Vulnerability.BOTH,
    "ALL": Vulnerability.BOTH,
}


def dealer_for_board(board: int) -> Seat:
    """Dealer rotates North, East, South, West with the board number."""
    return _DEALER_CYCLE[(board - 1) % NUM_SEATS]


_DEALER_CYCLE: tuple[Seat, ...] = (Seat.NORTH, Seat.EAST, Seat.SOUTH, Seat.WEST)
