"""FastAPI router for bridge tables.

One authoritative :class:`Hand` per table.  Every transition is applied
under the table's lock and the table then points at the returned hand,
so concurrent requests against one table are serialised while different
tables never contend.

Flow: BIDDING → PLAYING → COMPLETE (or BIDDING → COMPLETE when passed out).
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional

from fastapi import APIRouter, HTTPException

from bridgehand.auction import parse_call
from bridgehand.hand import DummyControl, Hand
from bridgehand.record import card_from_json
from bridgehand.rules import Trick
from bridgehand.seat import Seat

log = logging.getLogger(__name__)


@dataclass
class Table:
    id: str
    hand: Hand
    lock: threading.Lock = field(default_factory=threading.Lock)


_tables: dict[str, Table] = {}
_tables_lock = threading.Lock()


def _get_table(hand_id: str) -> Table:
    table = _tables.get(hand_id)
    if table is None:
        raise HTTPException(404, "Hand not found")
    return table


def _seat_from_json(obj: Any) -> Seat:
    if not isinstance(obj, str):
        raise HTTPException(400, f"Invalid seat: {obj!r}")
    try:
        return Seat.from_string(obj)
    except ValueError as e:
        raise HTTPException(400, str(e))


# ---------------------------------------------------------------------------
#  State serialisation
# ---------------------------------------------------------------------------


def _trick_json(trick: Trick) -> dict[str, Any]:
    winner = trick.winning_seat
    return {
        "leader": trick.leader.to_json(),
        "cards": [c.to_json() for c in trick.cards],
        "winner": winner.to_json() if winner is not None else None,
    }


def _public_state(hand_id: str, hand: Hand) -> dict[str, Any]:
    contract = hand.contract
    turn = hand.turn
    declarer = contract.declarer
    return {
        "handId": hand_id,
        **hand.to_json(),
        "state": hand.state.value,
        "turn": turn.to_json() if turn is not None else None,
        "contract": contract.label,
        "declarer": declarer.to_json() if declarer is not None else None,
        "doubled": contract.doubled,
        "redoubled": contract.redoubled,
        "tricks": [_trick_json(t) for t in hand.tricks],
        "nsTricks": hand.ns_tricks,
        "ewTricks": hand.ew_tricks,
        "result": hand.result,
        "score": hand.score,
        "positions": hand.positions,
    }


def _apply(table: Table, transition: Callable[[Hand], Optional[Hand]]) -> dict[str, Any]:
    """Run *transition* on the table's hand under its lock and swap it in."""
    with table.lock:
        new_hand: Optional[Hand] = transition(table.hand)
        if new_hand is None:
            raise HTTPException(409, "Illegal action")
        table.hand = new_hand
        log.info("Table %s: %d positions, state=%s",
                 table.id, new_hand.positions, new_hand.state.value)
        return _public_state(table.id, new_hand)


# ---------------------------------------------------------------------------
#  Router
# ---------------------------------------------------------------------------

router = APIRouter(prefix="/api/hands", tags=["hands"])

# Fields that mark a request body as a hand record rather than a fresh deal.
_RECORD_FIELDS = frozenset(
    {"dealer", "vulnerability", "deal", "bidding", "play", "players", "claim"}
)


@router.post("")
def new_hand(body: dict[str, Any] = {}) -> dict[str, Any]:
    """Open a table.

    Body is either a hand record or ``{ board: 1, seed: 42 }`` for a fresh
    shuffled deal.  Any record field other than ``board`` (``dealer``,
    ``deal``, ``bidding``, ``play``, …) makes the body a record; ``board``
    and ``seed`` alone deal fresh cards.  The optional
    ``dummyControl`` field (``"dummy"`` | ``"declarer"``) selects who
    plays dummy's cards.
    """
    try:
        dummy_control = DummyControl(body.get("dummyControl", DummyControl.DUMMY.value))
    except ValueError:
        raise HTTPException(400, f"Invalid dummyControl: {body.get('dummyControl')!r}")

    hand_id = str(uuid.uuid4())
    try:
        if _RECORD_FIELDS.intersection(body):
            hand = Hand.from_json(body, id=hand_id)
        else:
            seed = body.get("seed")
            hand = Hand.new_deal(
                board=int(body.get("board", 1)),
                seed=None if seed is None else int(seed),
                id=hand_id,
            )
    except (TypeError, ValueError) as e:
        raise HTTPException(400, str(e))

    hand = replace(hand, dummy_control=dummy_control)

    with _tables_lock:
        _tables[hand_id] = Table(id=hand_id, hand=hand)
    log.info("Opened table %s (board %d, dealer %s)", hand_id, hand.board, hand.dealer)
    return _public_state(hand_id, hand)


@router.get("/{hand_id}")
def get_hand(hand_id: str, position: Optional[int] = None) -> dict[str, Any]:
    """Current state, or the state after *position* actions for replay."""
    table = _get_table(hand_id)
    hand = table.hand
    if position is not None:
        hand = hand.at_position(position)
    return _public_state(hand_id, hand)


@router.get("/{hand_id}/valid-calls")
def valid_calls(hand_id: str) -> dict[str, Any]:
    table = _get_table(hand_id)
    hand = table.hand
    turn = hand.turn if hand.is_bidding else None
    return {
        "seat": turn.to_json() if turn is not None else None,
        "calls": [c.to_json() for c in hand.valid_calls()],
    }


@router.post("/{hand_id}/bid")
def bid(hand_id: str, body: dict[str, Any]) -> dict[str, Any]:
    """Body: { seat: "North", call: "1NT" }"""
    table = _get_table(hand_id)
    seat = _seat_from_json(body.get("seat"))
    raw = body.get("call")
    if not isinstance(raw, str):
        raise HTTPException(400, f"Invalid call: {raw!r}")
    try:
        call = parse_call(raw)
    except ValueError as e:
        raise HTTPException(400, str(e))
    return _apply(table, lambda h: h.do_bid(call, seat))


@router.post("/{hand_id}/play")
def play(hand_id: str, body: dict[str, Any]) -> dict[str, Any]:
    """Body: { seat: "East", card: 51 }"""
    table = _get_table(hand_id)
    seat = _seat_from_json(body.get("seat"))
    try:
        card = card_from_json(body.get("card"))
    except ValueError as e:
        raise HTTPException(400, str(e))
    return _apply(table, lambda h: h.do_play(card, seat))


@router.post("/{hand_id}/claim")
def claim(hand_id: str, body: dict[str, Any]) -> dict[str, Any]:
    """Body: { tricks: 10 }, the total tricks for declarer's side."""
    table = _get_table(hand_id)
    raw = body.get("tricks")
    if not isinstance(raw, int) or isinstance(raw, bool):
        raise HTTPException(400, f"Invalid trick count: {raw!r}")
    return _apply(table, lambda h: h.do_claim(raw))
