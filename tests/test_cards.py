"""Tests for card ids, suits and dealing."""

import pytest

from bridgehand.cards import Card, PLAYING_SUITS, Suit, make_deck, shuffled_deal


class TestSuit:
    def test_strain_order(self):
        assert Suit.CLUB < Suit.DIAMOND < Suit.HEART < Suit.SPADE < Suit.NOTRUMP

    def test_codes(self):
        assert [s.code for s in Suit] == ["C", "D", "H", "S", "NT"]

    def test_from_string_accepts_code_and_glyph(self):
        assert Suit.from_string("nt") is Suit.NOTRUMP
        assert Suit.from_string("♥") is Suit.HEART
        assert Suit.from_string("S") is Suit.SPADE

    def test_from_string_rejects_junk(self):
        with pytest.raises(ValueError):
            Suit.from_string("X")

    def test_majors(self):
        assert Suit.SPADE.is_major
        assert not Suit.DIAMOND.is_major
        assert not Suit.NOTRUMP.is_major


class TestCard:
    def test_id_layout(self):
        assert Card(0).suit is Suit.CLUB
        assert Card(0).rank == 0
        assert Card(12).rank_str == "A"
        assert Card(13).suit is Suit.DIAMOND
        assert Card(51).suit is Suit.SPADE

    def test_labels(self):
        assert Card(0).short() == "2C"
        assert Card(51).short() == "AS"
        assert str(Card(34)) == "T♥"

    def test_of(self):
        assert Card.of(Suit.HEART, 10) == Card(36)
        assert Card.of(Suit.HEART, 10).short() == "QH"

    def test_of_rejects_notrump(self):
        with pytest.raises(ValueError):
            Card.of(Suit.NOTRUMP, 0)

    @pytest.mark.parametrize("bad", [-1, 52, True, "3"])
    def test_invalid_ids(self, bad):
        with pytest.raises(ValueError):
            Card(bad)

    def test_ordering_follows_id(self):
        assert Card(3) < Card(40)
        assert max(Card(12), Card(13)) == Card(13)


class TestDeck:
    def test_deck_in_id_order(self):
        deck = make_deck()
        assert [c.id for c in deck] == list(range(52))

    def test_each_suit_has_thirteen(self):
        deck = make_deck()
        for suit in PLAYING_SUITS:
            assert sum(1 for c in deck if c.suit is suit) == 13

    def test_shuffle_is_a_permutation(self):
        deal = shuffled_deal(seed=42)
        assert sorted(deal) == make_deck()

    def test_same_seed_same_deal(self):
        assert shuffled_deal(seed=7) == shuffled_deal(seed=7)

    def test_different_seeds_differ(self):
        assert shuffled_deal(seed=1) != shuffled_deal(seed=2)
