"""Tests for the table HTTP API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from apps.api.main import app


@pytest.fixture
def client():
    return TestClient(app)


def open_table(client, **body):
    r = client.post("/api/hands", json={"board": 1, "seed": 1, **body})
    assert r.status_code == 200, r.text
    return r.json()


def bid(client, hand_id, seat, call):
    return client.post(f"/api/hands/{hand_id}/bid", json={"seat": seat, "call": call})


class TestOpenTable:
    def test_new_deal(self, client):
        data = open_table(client)
        assert data["board"] == 1
        assert data["dealer"] == "North"
        assert data["vulnerability"] == "None"
        assert len(data["deal"]) == 52
        assert data["state"] == "bidding"
        assert data["turn"] == "North"
        assert data["contract"] == ""

    def test_from_record(self, client):
        r = client.post("/api/hands", json={
            "dealer": "East",
            "deal": list(range(52)),
            "bidding": ["1S", "Pass", "Pass", "Pass"],
        })
        assert r.status_code == 200
        data = r.json()
        assert data["state"] == "playing"
        assert data["contract"] == "1S East"
        assert data["turn"] == "South"

    def test_malformed_record(self, client):
        r = client.post("/api/hands", json={"deal": [1, 2, 3]})
        assert r.status_code == 400

    @pytest.mark.parametrize("body", [
        {"dealer": 5, "deal": list(range(52))},
        {"vulnerability": 2},
        {"players": "Ann"},
    ])
    def test_malformed_tokens(self, client, body):
        assert client.post("/api/hands", json=body).status_code == 400

    def test_any_record_field_makes_a_record(self, client):
        r = client.post("/api/hands", json={"board": 7, "dealer": "West"})
        assert r.status_code == 200
        data = r.json()
        assert data["board"] == 7
        assert data["dealer"] == "West"
        assert data["deal"] == []

    def test_board_alone_deals_fresh_cards(self, client):
        data = open_table(client, board=3)
        assert data["dealer"] == "South"
        assert len(data["deal"]) == 52

    def test_bad_dummy_control(self, client):
        r = client.post("/api/hands", json={"dummyControl": "nobody"})
        assert r.status_code == 400

    def test_unknown_table(self, client):
        assert client.get("/api/hands/nope").status_code == 404


class TestBidding:
    def test_bid_sequence(self, client):
        hand_id = open_table(client)["handId"]
        assert bid(client, hand_id, "North", "1NT").status_code == 200
        assert bid(client, hand_id, "East", "Pass").status_code == 200
        assert bid(client, hand_id, "South", "Pass").status_code == 200
        r = bid(client, hand_id, "West", "Pass")
        assert r.status_code == 200
        data = r.json()
        assert data["state"] == "playing"
        assert data["contract"] == "1NT North"
        assert data["declarer"] == "North"
        assert data["turn"] == "East"

    def test_out_of_turn_conflict(self, client):
        hand_id = open_table(client)["handId"]
        assert bid(client, hand_id, "South", "1C").status_code == 409

    def test_insufficient_bid_conflict(self, client):
        hand_id = open_table(client)["handId"]
        bid(client, hand_id, "North", "2C")
        assert bid(client, hand_id, "East", "1S").status_code == 409

    def test_malformed_call(self, client):
        hand_id = open_table(client)["handId"]
        assert bid(client, hand_id, "North", "9Z").status_code == 400
        assert bid(client, hand_id, "Nowhere", "1C").status_code == 400

    def test_valid_calls(self, client):
        hand_id = open_table(client)["handId"]
        bid(client, hand_id, "North", "7NT")
        data = client.get(f"/api/hands/{hand_id}/valid-calls").json()
        assert data["seat"] == "East"
        assert data["calls"] == ["Pass", "X"]


class TestPlayAndClaim:
    def _playing(self, client):
        hand_id = open_table(client)["handId"]
        for seat, call in [("North", "1NT"), ("East", "Pass"), ("South", "Pass"), ("West", "Pass")]:
            bid(client, hand_id, seat, call)
        return hand_id

    def test_play_card(self, client):
        hand_id = self._playing(client)
        deal = client.get(f"/api/hands/{hand_id}").json()["deal"]
        # East's holding is the last thirteen cards of the deal.
        card = deal[39]
        r = client.post(f"/api/hands/{hand_id}/play", json={"seat": "East", "card": card})
        assert r.status_code == 200
        data = r.json()
        assert data["play"] == [card]
        assert data["turn"] == "South"

    def test_play_out_of_turn(self, client):
        hand_id = self._playing(client)
        deal = client.get(f"/api/hands/{hand_id}").json()["deal"]
        r = client.post(f"/api/hands/{hand_id}/play", json={"seat": "South", "card": deal[0]})
        assert r.status_code == 409

    def test_play_bad_card(self, client):
        hand_id = self._playing(client)
        r = client.post(f"/api/hands/{hand_id}/play", json={"seat": "East", "card": 77})
        assert r.status_code == 400

    def test_play_non_integer_card(self, client):
        hand_id = self._playing(client)
        deal = client.get(f"/api/hands/{hand_id}").json()["deal"]
        for card in (deal[39] + 0.5, str(deal[39]), True):
            r = client.post(f"/api/hands/{hand_id}/play", json={"seat": "East", "card": card})
            assert r.status_code == 400
        assert client.get(f"/api/hands/{hand_id}").json()["play"] == []

    def test_claim(self, client):
        hand_id = self._playing(client)
        r = client.post(f"/api/hands/{hand_id}/claim", json={"tricks": 7})
        assert r.status_code == 200
        data = r.json()
        assert data["state"] == "complete"
        assert data["claim"] == 7
        assert data["result"] == 0
        assert data["score"] == 90

    def test_claim_out_of_range(self, client):
        hand_id = self._playing(client)
        r = client.post(f"/api/hands/{hand_id}/claim", json={"tricks": 20})
        assert r.status_code == 409

    def test_replay_position(self, client):
        hand_id = self._playing(client)
        data = client.get(f"/api/hands/{hand_id}", params={"position": 2}).json()
        assert data["bidding"] == ["1NT", "Pass"]
        assert data["state"] == "bidding"
        assert data["turn"] == "South"
