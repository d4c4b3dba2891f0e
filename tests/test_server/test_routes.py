"""
Tests for the HTTP API.
"""

import pytest
from flipout.core.card import parse_cards


def _create_table(client, **body):
    response = client.post("/tables", json=body)
    assert response.status_code == 200
    return response.json()["table_id"]


def _table(client, table_id):
    return client.app.state.table_manager.get_room(table_id).table


class TestTables:
    """Creating, reading and removing tables."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_create_table(self, client):
        response = client.post("/tables", json={})
        assert response.status_code == 200
        assert response.json() == {"table_id": "table-1", "max_players": 10}

    def test_tables_get_distinct_ids(self, client):
        assert _create_table(client) != _create_table(client)

    def test_apps_do_not_share_tables(self, client):
        from fastapi.testclient import TestClient
        from flipout.server.app import create_app

        table_id = _create_table(client)
        other = TestClient(create_app())
        assert other.get(f"/tables/{table_id}").status_code == 404

    def test_create_table_bad_limit(self, client):
        assert client.post("/tables", json={"max_players": 0}).status_code == 422
        assert client.post("/tables", json={"max_players": 24}).status_code == 422

    def test_empty_table_state(self, client):
        table_id = _create_table(client)
        state = client.get(f"/tables/{table_id}").json()
        assert state["stage"] == "WAITING"
        assert state["seats"] == []
        assert state["board"] == []
        assert state["showdown"] is None

    def test_unknown_table(self, client):
        assert client.get("/tables/nope").status_code == 404
        assert client.post("/tables/nope/showdown").status_code == 404
        assert client.post("/tables/nope/advance", json={"stage": "flop"}).status_code == 404

    def test_delete_table(self, client):
        table_id = _create_table(client)
        assert client.delete(f"/tables/{table_id}").status_code == 200
        assert client.get(f"/tables/{table_id}").status_code == 404
        assert client.delete(f"/tables/{table_id}").status_code == 404


class TestHandFlow:
    """Dealing, streets and showdown over HTTP."""

    def test_start_hand(self, client):
        table_id = _create_table(client)
        response = client.post(f"/tables/{table_id}/hands", json={"player_count": 4})
        assert response.status_code == 200
        state = response.json()
        assert state["stage"] == "PREFLOP"
        assert state["hand_number"] == 1
        assert len(state["seats"]) == 4
        assert all(len(seat["cards"]) == 2 for seat in state["seats"])
        assert state["deck_remaining"] == 44

    def test_next_hand_reuses_count(self, client):
        table_id = _create_table(client)
        client.post(f"/tables/{table_id}/hands", json={"player_count": 3})
        state = client.post(f"/tables/{table_id}/hands", json={}).json()
        assert len(state["seats"]) == 3
        assert state["hand_number"] == 2

    def test_bad_player_count(self, client):
        table_id = _create_table(client)
        assert client.post(f"/tables/{table_id}/hands", json={"player_count": 11}).status_code == 400
        assert client.post(f"/tables/{table_id}/hands", json={"player_count": 0}).status_code == 422

    def test_misordered_advance_is_noop(self, client):
        table_id = _create_table(client)
        client.post(f"/tables/{table_id}/hands", json={"player_count": 2})

        response = client.post(f"/tables/{table_id}/advance", json={"stage": "turn"})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["stage"] == "PREFLOP"
        assert body["board"] == []

    def test_unknown_stage(self, client):
        table_id = _create_table(client)
        client.post(f"/tables/{table_id}/hands", json={"player_count": 2})
        response = client.post(f"/tables/{table_id}/advance", json={"stage": "bogus"})
        assert response.status_code == 400

    def test_streets_and_showdown(self, client):
        table_id = _create_table(client)
        client.post(f"/tables/{table_id}/hands", json={"player_count": 5})

        flop = client.post(f"/tables/{table_id}/advance", json={"stage": "flop"}).json()
        assert flop["success"] is True
        assert len(flop["cards"]) == 3
        assert len(flop["board"]) == 3

        early = client.post(f"/tables/{table_id}/showdown").json()
        assert early["not_ready"] is True
        assert early["winners"] == []

        reveal = client.post(f"/tables/{table_id}/reveal", json={"auto_showdown": True}).json()
        assert [s["stage"] for s in reveal["streets"]] == ["TURN", "RIVER"]
        assert len(reveal["board"]) == 5
        showdown = reveal["showdown"]
        assert showdown["not_ready"] is False
        assert len(showdown["winners"]) >= 1
        assert set(showdown["labels"]) == {"0", "1", "2", "3", "4"}

        state = client.get(f"/tables/{table_id}").json()
        assert state["stage"] == "SHOWDOWN"
        assert state["showdown"]["winners"] == showdown["winners"]
        assert state["showdown"]["labels"] == showdown["labels"]
        results = {seat["index"]: seat["result"] for seat in state["seats"]}
        for index in showdown["winners"]:
            assert results[index] in ("winner", "chop")

    def test_chop_over_http(self, client):
        table_id = _create_table(client)
        client.post(f"/tables/{table_id}/hands", json={"player_count": 2})
        table = _table(client, table_id)
        table.seats[0].hole_cards = parse_cards("2c 2d")
        table.seats[1].hole_cards = parse_cards("3h 4s")
        table.community_cards = parse_cards("5s 6h 7d 8c 9s")

        body = client.post(f"/tables/{table_id}/showdown").json()
        assert body["winners"] == [0, 1]
        assert body["is_chop"] is True
        assert body["labels"]["0"] == "Straight (9 High)"


class TestDescription:
    """Seat descriptions."""

    def test_describe_seat(self, client):
        table_id = _create_table(client)
        client.post(f"/tables/{table_id}/hands", json={"player_count": 2})
        table = _table(client, table_id)
        table.seats[1].hole_cards = parse_cards("7c 2d")
        table.community_cards = parse_cards("Ks 9h 4s Tc Jd")

        response = client.get(f"/tables/{table_id}/seats/1/description")
        assert response.status_code == 200
        assert response.json() == {"seat": 1, "name": "🐮 Ox", "label": "7 High"}

    @pytest.mark.parametrize("seat", [2, 50])
    def test_describe_unknown_seat(self, client, seat):
        table_id = _create_table(client)
        client.post(f"/tables/{table_id}/hands", json={"player_count": 2})
        response = client.get(f"/tables/{table_id}/seats/{seat}/description")
        assert response.status_code == 404
