"""One bridge deal as an immutable state machine.

A :class:`Hand` holds only the raw history (deal, calls, plays, claim)
and derives everything else (contract, tricks, turn, score) from it on
demand.  Transitions never mutate: :meth:`Hand.do_bid`,
:meth:`Hand.do_play` and :meth:`Hand.do_claim` return a new ``Hand``, or
``None`` when the action is illegal.

Phases: BIDDING → PLAYING → COMPLETE.  A passed-out auction goes straight
to COMPLETE; otherwise the hand completes once a claim is recorded or all
52 cards have been played.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from functools import cached_property
from typing import Any, List, Optional, Union

from bridgehand.auction import Auction, Bid, Contract
from bridgehand.cards import Card, shuffled_deal
from bridgehand.constants import (
    CARDS_PER_SEAT,
    DECK_SIZE,
    DEFAULT_PLAYER_NAMES,
    NO_BOARD,
    NUM_SEATS,
    TRICKS_PER_DEAL,
)
from bridgehand.record import (
    HandJson,
    call_from_json,
    card_from_json,
    claim_from_json,
    players_from_json,
)
from bridgehand.rules import Trick, build_tricks, legal_plays
from bridgehand.scoring import contract_result, score_contract
from bridgehand.seat import Seat, Vulnerability, dealer_for_board

log = logging.getLogger(__name__)


class HandState(Enum):
    BIDDING = "bidding"
    PLAYING = "playing"
    COMPLETE = "complete"


class DummyControl(str, Enum):
    """Which seat may act when it is dummy's turn to play.

    ``DUMMY``: dummy's own seat plays dummy's cards.
    ``DECLARER``: declarer plays dummy's cards.
    """

    DUMMY = "dummy"
    DECLARER = "declarer"


@dataclass(frozen=True)
class Hand:
    id: Optional[str] = None
    board: int = NO_BOARD
    dealer: Seat = Seat.SOUTH
    vulnerability: Vulnerability = Vulnerability.NONE
    deal: tuple[Card, ...] = ()
    calls: tuple[Bid, ...] = ()
    play: tuple[Card, ...] = ()
    claim: Optional[int] = None
    players: tuple[str, ...] = DEFAULT_PLAYER_NAMES
    dummy_control: DummyControl = DummyControl.DUMMY

    def __post_init__(self) -> None:
        for name in ("deal", "calls", "play", "players"):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))

        if self.deal:
            if len(self.deal) != DECK_SIZE:
                raise ValueError(
                    f"A deal must hold {DECK_SIZE} cards, got {len(self.deal)}"
                )
            if len({c.id for c in self.deal}) != DECK_SIZE:
                raise ValueError("A deal must not repeat cards")
        if self.claim is not None and not 0 <= self.claim <= TRICKS_PER_DEAL:
            raise ValueError(f"Claim must be 0..{TRICKS_PER_DEAL}, got {self.claim}")
        if len(self.players) != NUM_SEATS:
            raise ValueError(f"Expected {NUM_SEATS} players, got {len(self.players)}")

    # ------------------------------------------------------------------
    #  Construction / serialisation
    # ------------------------------------------------------------------

    @classmethod
    def from_json(cls, data: HandJson, id: Optional[str] = None) -> Hand:
        """Build a hand from a record; see :mod:`bridgehand.record`."""
        board = data.get("board")
        dealer = data.get("dealer")
        vulnerability = data.get("vulnerability")
        return cls(
            id=id,
            board=NO_BOARD if board is None else int(board),
            dealer=Seat.SOUTH if dealer is None else Seat.from_string(dealer),
            vulnerability=(
                Vulnerability.NONE if vulnerability is None
                else Vulnerability.from_string(vulnerability)
            ),
            deal=tuple(card_from_json(c) for c in data.get("deal") or ()),
            calls=tuple(call_from_json(b) for b in data.get("bidding") or ()),
            play=tuple(card_from_json(c) for c in data.get("play") or ()),
            claim=claim_from_json(data.get("claim")),
            players=players_from_json(data.get("players")),
        )

    def to_json(self) -> HandJson:
        out: HandJson = {
            "board": self.board,
            "dealer": self.dealer.to_json(),
            "vulnerability": self.vulnerability.to_json(),
            "deal": [c.to_json() for c in self.deal],
            "bidding": [b.to_json() for b in self.calls],
            "play": [c.to_json() for c in self.play],
            "players": list(self.players),
        }
        if self.claim is not None:
            out["claim"] = self.claim
        return out

    @classmethod
    def new_deal(
        cls,
        board: int = 1,
        seed: Optional[int] = None,
        id: Optional[str] = None,
        **kwargs: Any,
    ) -> Hand:
        """Fresh shuffled deal; dealer and vulnerability follow the board number."""
        return cls(
            id=id,
            board=board,
            dealer=dealer_for_board(board),
            vulnerability=Vulnerability.for_board(board),
            deal=tuple(shuffled_deal(seed)),
            **kwargs,
        )

    # ------------------------------------------------------------------
    #  Derived state
    # ------------------------------------------------------------------

    @cached_property
    def auction(self) -> Auction:
        return Auction(self.calls, self.dealer)

    @property
    def contract(self) -> Contract:
        return self.auction.contract

    @property
    def declarer(self) -> Optional[Seat]:
        return self.contract.declarer

    @property
    def dummy(self) -> Optional[Seat]:
        declarer = self.declarer
        return declarer.partner() if declarer is not None else None

    @property
    def opening_leader(self) -> Optional[Seat]:
        """Declarer's left-hand opponent."""
        declarer = self.declarer
        return declarer.next() if declarer is not None else None

    @property
    def next_bidder(self) -> Seat:
        return self.auction.next_caller

    @cached_property
    def state(self) -> HandState:
        contract = self.contract
        if contract.passed:
            return HandState.COMPLETE
        if not contract.complete:
            return HandState.BIDDING
        if self.claim is not None:
            return HandState.COMPLETE
        if len(self.play) == DECK_SIZE:
            return HandState.COMPLETE
        return HandState.PLAYING

    @property
    def is_bidding(self) -> bool:
        return self.state is HandState.BIDDING

    @property
    def is_playing(self) -> bool:
        return self.state is HandState.PLAYING

    @property
    def is_complete(self) -> bool:
        return self.state is HandState.COMPLETE

    @cached_property
    def tricks(self) -> List[Trick]:
        trump = self.contract.suit
        leader = self.opening_leader
        if trump is None or leader is None:
            return []
        return build_tricks(self.play, leader, trump)

    @property
    def current_trick(self) -> Optional[Trick]:
        """The trick in progress, if one has been started and not finished."""
        tricks = self.tricks
        if tricks and not tricks[-1].is_complete:
            return tricks[-1]
        return None

    @property
    def player(self) -> Optional[Seat]:
        """Seat whose card is next during the play."""
        tricks = self.tricks
        if not tricks:
            return self.opening_leader
        return tricks[-1].next_seat

    @property
    def turn(self) -> Optional[Seat]:
        """Seat due to act: next caller, next player, or ``None`` when complete."""
        if self.is_bidding:
            return self.next_bidder
        if self.is_playing:
            return self.player
        return None

    @property
    def positions(self) -> int:
        return len(self.calls) + len(self.play)

    # ---- Holdings ----

    def holding(self, seat: Seat) -> List[Card]:
        """Cards *seat* still holds, highest id first; empty if undealt."""
        if len(self.deal) != DECK_SIZE:
            return []
        offset = CARDS_PER_SEAT * seat.value
        played = set(self.play)
        return sorted(
            (c for c in self.deal[offset:offset + CARDS_PER_SEAT] if c not in played),
            reverse=True,
        )

    @property
    def south(self) -> List[Card]:
        return self.holding(Seat.SOUTH)

    @property
    def west(self) -> List[Card]:
        return self.holding(Seat.WEST)

    @property
    def north(self) -> List[Card]:
        return self.holding(Seat.NORTH)

    @property
    def east(self) -> List[Card]:
        return self.holding(Seat.EAST)

    # ---- Tricks and score ----

    def tricks_won_by(self, seat: Seat) -> int:
        """Completed tricks won by *seat*'s partnership."""
        return sum(
            1 for t in self.tricks
            if t.winning_seat is not None and t.winning_seat.is_team(seat)
        )

    @property
    def ns_tricks(self) -> int:
        return self.tricks_won_by(Seat.NORTH)

    @property
    def ew_tricks(self) -> int:
        return self.tricks_won_by(Seat.EAST)

    @property
    def declarer_tricks(self) -> int:
        """Tricks for declarer's side: the claim if any, else tricks won."""
        if self.claim is not None:
            return self.claim
        declarer = self.declarer
        return self.tricks_won_by(declarer) if declarer is not None else 0

    @property
    def result(self) -> int:
        """Tricks over (+) or under (−) the contract; 0 until complete."""
        level = self.contract.level
        if not self.is_complete or level is None:
            return 0
        return contract_result(level, self.declarer_tricks)

    @property
    def score(self) -> int:
        """Duplicate score for the declaring side; 0 until complete."""
        contract = self.contract
        if not self.is_complete or contract.passed or contract.declarer is None:
            return 0
        vulnerable = self.vulnerability.is_vulnerable(contract.declarer)
        return score_contract(contract, self.declarer_tricks, vulnerable)

    def score_as(self, seat: Seat) -> int:
        declarer = self.declarer
        if declarer is None:
            return 0
        return self.score if seat.is_team(declarer) else -self.score

    # ------------------------------------------------------------------
    #  Transitions
    # ------------------------------------------------------------------

    def _bid_rejection(self, call: Bid, seat: Seat) -> Optional[str]:
        if not self.is_bidding:
            return f"not bidding (state={self.state.value})"
        if self.next_bidder != seat:
            return f"not {seat}'s turn (next={self.next_bidder})"
        if not self.auction.validate_next(call):
            return "call is not legal here"
        return None

    def can_bid(self, call: Bid, seat: Seat) -> bool:
        return self._bid_rejection(call, seat) is None

    def valid_calls(self) -> List[Bid]:
        if not self.is_bidding:
            return []
        return self.auction.valid_calls()

    def do_bid(self, call: Bid, seat: Seat) -> Optional[Hand]:
        """Append *call* by *seat*; ``None`` if it is illegal or out of turn."""
        reason = self._bid_rejection(call, seat)
        if reason is not None:
            log.debug("Rejected call %s by %s: %s", call, seat, reason)
            return None
        return replace(self, calls=self.calls + (call,))

    def acting_seat(self, seat: Seat) -> Seat:
        """Seat allowed to act when it is *seat*'s turn to play."""
        if self.dummy_control is DummyControl.DECLARER and seat == self.dummy:
            declarer = self.declarer
            assert declarer is not None
            return declarer
        return seat

    def legal_plays(self, seat: Seat) -> List[Card]:
        """Cards *seat* could legally play if it were on turn."""
        return legal_plays(self.holding(seat), self.current_trick)

    def _play_rejection(self, card: Card, seat: Seat) -> Optional[str]:
        if not self.is_playing:
            return f"not playing (state={self.state.value})"
        turn = self.player
        assert turn is not None
        if self.acting_seat(turn) != seat:
            return f"not {seat}'s turn (next={turn})"
        holding = self.holding(turn)
        if card not in holding:
            return f"{card} not held by {turn}"
        if card not in legal_plays(holding, self.current_trick):
            return f"{card} does not follow suit"
        return None

    def can_play(self, card: Card, seat: Seat) -> bool:
        return self._play_rejection(card, seat) is None

    def do_play(self, card: Card, seat: Seat) -> Optional[Hand]:
        """Append *card* played by *seat*; ``None`` if illegal or out of turn."""
        reason = self._play_rejection(card, seat)
        if reason is not None:
            log.debug("Rejected play %s by %s: %s", card, seat, reason)
            return None
        return replace(self, play=self.play + (card,))

    def do_claim(self, tricks: int) -> Optional[Hand]:
        """Record that declarer's side ends the deal with *tricks* in total.

        The claim must cover at least the tricks already won and at most
        those plus every trick not yet completed.
        """
        if not self.is_playing:
            log.debug("Rejected claim of %d: not playing", tricks)
            return None
        won = self.tricks_won_by(self.declarer)
        completed = sum(1 for t in self.tricks if t.is_complete)
        if not won <= tricks <= won + (TRICKS_PER_DEAL - completed):
            log.debug("Rejected claim of %d: outside %d..%d", tricks, won,
                      won + TRICKS_PER_DEAL - completed)
            return None
        return replace(self, claim=tricks)

    def set_player(self, seat: Seat, player: str) -> Hand:
        players = list(self.players)
        players[seat.value] = player
        return replace(self, players=tuple(players))

    # ------------------------------------------------------------------
    #  Replay
    # ------------------------------------------------------------------

    def at_position(self, pos: int) -> Hand:
        """The hand after its first *pos* actions (calls first, then plays).

        Out-of-range positions return the hand unchanged.  A truncated
        hand never keeps the claim.
        """
        if pos < 0 or pos >= self.positions:
            return self
        calls = self.calls[:pos]
        play = self.play[:pos - len(calls)] if len(calls) < pos else ()
        return replace(self, calls=calls, play=play, claim=None)

    def previous_turn(self, pos: int) -> int:
        """Latest earlier position where the seat on turn at *pos* was on turn."""
        if pos < 0 or pos >= self.positions:
            return -1
        seat = self.at_position(pos).turn
        if seat is None:
            return -1
        while pos > 0:
            pos -= 1
            if self.at_position(pos).turn == seat:
                return pos
        return -1

    def next_turn(self, pos: int) -> int:
        """Next later position where the seat on turn at *pos* is on turn again."""
        if pos < 0 or pos >= self.positions:
            return -1
        seat = self.at_position(pos).turn
        if seat is None:
            return -1
        while pos < self.positions:
            pos += 1
            if self.at_position(pos).turn == seat:
                return pos
        return -1

    def last_action(self) -> Union[Bid, Card]:
        if self.play:
            return self.play[-1]
        if self.calls:
            return self.calls[-1]
        raise ValueError("No past actions")

    def is_equivalent(self, other: Hand) -> bool:
        """Same deal, calls and plays; everything else is ignored."""
        return (
            self.deal == other.deal
            and self.calls == other.calls
            and self.play == other.play
        )

