"""Tests for bridge trick-taking rules."""

import pytest

from bridgehand.cards import Card, Suit
from bridgehand.rules import Trick, build_tricks, follows_suit, legal_plays, winning_index
from bridgehand.seat import Seat


# === Helpers ===

C = Suit.CLUB
D = Suit.DIAMOND
H = Suit.HEART
S = Suit.SPADE
NT = Suit.NOTRUMP

TWO, THREE, FOUR, FIVE, SIX, SEVEN, EIGHT, NINE, TEN, JACK, QUEEN, KING, ACE = range(13)


def K(suit, rank):
    """Shorthand card constructor."""
    return Card.of(suit, rank)


# === Trick winner ===


class TestWinningIndex:
    def test_highest_of_led_suit_wins(self):
        cards = [K(H, TEN), K(H, KING), K(H, TWO), K(H, JACK)]
        assert winning_index(cards, NT) == 1

    def test_off_suit_never_wins_without_trump(self):
        cards = [K(D, TWO), K(S, ACE), K(C, ACE), K(H, ACE)]
        assert winning_index(cards, NT) == 0

    def test_trump_beats_led_suit(self):
        cards = [K(D, ACE), K(S, TWO), K(D, KING), K(D, QUEEN)]
        assert winning_index(cards, S) == 1

    def test_highest_trump_wins(self):
        cards = [K(D, ACE), K(S, TWO), K(S, NINE), K(D, QUEEN)]
        assert winning_index(cards, S) == 2

    def test_trump_lead(self):
        cards = [K(S, FOUR), K(S, THREE), K(H, ACE), K(S, FIVE)]
        assert winning_index(cards, S) == 3

    def test_partial_trick(self):
        assert winning_index([K(C, FIVE), K(C, NINE)], H) == 1

    def test_empty_trick_raises(self):
        with pytest.raises(ValueError):
            winning_index([], NT)


class TestTrick:
    def test_winning_seat_counts_from_leader(self):
        t = Trick(Seat.WEST, (K(H, TEN), K(H, KING), K(H, TWO), K(H, JACK)), NT)
        assert t.winning_seat == Seat.NORTH
        assert t.next_seat == Seat.NORTH

    def test_incomplete_trick(self):
        t = Trick(Seat.EAST, (K(H, TEN), K(H, KING)), NT)
        assert not t.is_complete
        assert t.winning_seat is None
        assert t.led_suit is H
        assert t.next_seat == Seat.WEST

    def test_plays_pairs_seats(self):
        t = Trick(Seat.NORTH, (K(C, TWO), K(C, THREE)), NT)
        assert t.plays() == [(Seat.NORTH, K(C, TWO)), (Seat.EAST, K(C, THREE))]


class TestBuildTricks:
    def test_winner_leads_next_trick(self):
        play = [
            K(H, TEN), K(H, ACE), K(H, TWO), K(H, JACK),   # W leads, N wins
            K(C, TWO), K(S, TWO), K(C, THREE), K(C, FOUR),  # N leads, E ruffs
            K(D, FIVE),
        ]
        tricks = build_tricks(play, Seat.WEST, S)
        assert len(tricks) == 3
        assert tricks[0].winning_seat == Seat.NORTH
        assert tricks[1].leader == Seat.NORTH
        assert tricks[1].winning_seat == Seat.EAST
        assert tricks[2].leader == Seat.EAST
        assert not tricks[2].is_complete

    def test_no_play_no_tricks(self):
        assert build_tricks([], Seat.SOUTH, NT) == []


# === Legal plays ===


class TestLegalPlays:
    def test_leader_plays_anything(self):
        holding = [K(H, ACE), K(C, TWO), K(S, FIVE)]
        assert legal_plays(holding, None) == holding

    def test_must_follow_suit(self):
        holding = [K(H, ACE), K(C, TWO), K(C, NINE), K(S, FIVE)]
        trick = Trick(Seat.SOUTH, (K(C, KING),), H)
        assert legal_plays(holding, trick) == [K(C, TWO), K(C, NINE)]

    def test_void_may_ruff_or_discard(self):
        holding = [K(H, ACE), K(S, FIVE)]
        trick = Trick(Seat.SOUTH, (K(C, KING),), H)
        assert legal_plays(holding, trick) == holding

    def test_complete_trick_means_new_lead(self):
        holding = [K(H, ACE), K(S, FIVE)]
        trick = Trick(Seat.SOUTH, (K(C, KING), K(C, TWO), K(C, THREE), K(C, FOUR)), H)
        assert legal_plays(holding, trick) == holding

    def test_follows_suit(self):
        holding = [K(H, ACE), K(C, TWO)]
        trick = Trick(Seat.SOUTH, (K(C, KING),), NT)
        assert follows_suit(holding, K(C, TWO), trick)
        assert not follows_suit(holding, K(H, ACE), trick)
        assert not follows_suit(holding, K(C, THREE), trick)
