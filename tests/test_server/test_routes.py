"""
Tests for the HTTP API.

Bot and phase delays are long, so nothing scheduled fires while a test
runs: after the human acts the table waits on the bot's timer.
"""

import pytest
from fastapi.testclient import TestClient

from pokercoach.coach.session import SessionConfig
from pokercoach.coach.storage import MemoryStore
from pokercoach.server.app import create_app


@pytest.fixture
def client():
    config = SessionConfig(bot_delay_min=60, bot_delay_max=60, phase_delay=60, showdown_delay=60)
    app = create_app(config, store=MemoryStore())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def table(client):
    """Client with a heads-up table and one hand dealt."""
    assert client.post("/init_game", json={"player_count": 2}).status_code == 200
    assert client.post("/start_hand").status_code == 200
    return client


class TestGameSetup:

    def test_state_before_init(self, client):
        response = client.get("/get_game_state")
        assert response.status_code == 400
        assert response.json()["detail"] == "Game not initialized"

    def test_init_game(self, client):
        response = client.post("/init_game", json={"player_count": 3})
        assert response.status_code == 200
        assert response.json()["success"]

        state = client.get("/get_game_state").json()
        assert state["public_info"]["phase"] == "WAITING"
        assert len(state["public_info"]["players"]) == 3

    @pytest.mark.parametrize("count", [1, 6])
    def test_init_game_rejects_bad_count(self, client, count):
        assert client.post("/init_game", json={"player_count": count}).status_code == 422

    def test_start_hand(self, table):
        state = table.get("/get_game_state").json()
        assert state["public_info"]["phase"] == "PREFLOP"
        assert state["public_info"]["current_player"] == "user"
        assert len(state["private_info"]["hand"]) == 2
        assert state["session"]["advice"] == ""

    def test_start_hand_with_new_count(self, table):
        response = table.post("/start_hand", json={"player_count": 4})
        assert response.json()["hand_number"] == 2
        state = table.get("/get_game_state").json()
        assert len(state["public_info"]["players"]) == 4

    def test_reset_game(self, table):
        assert table.post("/reset_game").json()["success"]
        assert table.get("/get_game_state").status_code == 400


class TestActions:

    def test_legal_actions(self, table):
        actions = table.get("/legal_actions").json()["actions"]
        assert [a["type"] for a in actions] == ["FOLD", "CALL", "RAISE"]

    def test_call_hands_turn_to_bot(self, table):
        response = table.post("/take_action", json={"action_type": "call"})
        assert response.status_code == 200
        body = response.json()
        assert body["action_type"] == "CALL"
        assert body["amount"] == 10
        assert not body["hand_over"]

        state = table.get("/get_game_state").json()
        assert state["public_info"]["current_player"] == "bot-1"
        assert state["session"]["timer"] == "bot-turn-bot-1"
        assert table.get("/legal_actions").json()["actions"] == []

    @pytest.mark.parametrize("payload", [
        {"action_type": "CHECK"},
        {"action_type": "BET", "amount": 40},
        {"action_type": "RAISE", "amount": 5000},
    ])
    def test_illegal_action(self, table, payload):
        response = table.post("/take_action", json=payload)
        assert response.status_code == 400

    def test_negative_amount_rejected(self, table):
        assert table.post("/take_action", json={"action_type": "RAISE", "amount": -1}).status_code == 422

    def test_out_of_turn(self, table):
        table.post("/take_action", json={"action_type": "CALL"})
        response = table.post("/take_action", json={"action_type": "CHECK"})
        assert response.status_code == 400

    def test_fold_ends_hand(self, table):
        body = table.post("/take_action", json={"action_type": "FOLD"}).json()
        assert body["hand_over"]
        assert body["winner_id"] == "bot-1"
        assert body["pot"] == 30
        assert body["board"] == []
        assert body["players_cards"] is None

        legal = table.get("/legal_actions").json()
        assert legal["actions"] == []
        assert legal["message"] == "No hand in progress"


class TestCoachingRoutes:

    def test_profile_and_history(self, table):
        table.post("/take_action", json={"action_type": "FOLD"})

        profile = table.get("/profile").json()
        assert profile["profile"]["games_played"] == 1
        assert profile["profile"]["total_winnings"] == -10
        assert profile["last_assessment"] is None

        history = table.get("/history").json()["history"]
        assert len(history) == 1
        assert history[0]["winner_id"] == "bot-1"
        assert history[0]["logs"][-1]["action"] == "WIN"

    def test_profile_survives_new_table(self, table):
        table.post("/take_action", json={"action_type": "FOLD"})
        table.post("/init_game", json={"player_count": 2})
        assert table.get("/profile").json()["profile"]["games_played"] == 1
        assert len(table.get("/history").json()["history"]) == 1

    def test_analysis(self, table):
        table.post("/take_action", json={"action_type": "FOLD"})
        record_id = table.get("/history").json()["history"][0]["id"]

        response = table.post(f"/history/{record_id}/analysis")
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == record_id
        assert body["analysis"].startswith("You lost a pot of 30")

        latest = table.post("/history/latest/analysis").json()
        assert latest == body

    def test_analysis_unknown_record(self, table):
        assert table.post("/history/nope/analysis").status_code == 404

    def test_advice(self, table):
        advice = table.post("/advice").json()["advice"]
        assert advice
        assert table.get("/get_game_state").json()["session"]["advice"] == advice

    def test_assessment(self, table):
        response = table.post("/assessment")
        assert response.status_code == 200
        body = response.json()
        assert body["assessment_hands"] == 5
        assert body["hand_number"] == 2

        profile = table.get("/profile").json()
        assert profile["assessment_mode"]
        assert profile["assessment_hands_played"] == 0
