import pytest

from game import rules
from game.models import Deck
from helpers import C


def create_game(client, **body):
    response = client.post("/api/game/create", json=body)
    assert response.status_code == 200
    return response.get_json()["game_id"]


def stack_game(manager, game_id, draw_order):
    engine = manager.get_game(game_id)
    engine.deck_factory = lambda rng: Deck.stacked(draw_order, rng)
    return engine


def test_config_endpoint(client):
    data = client.get("/api/config").get_json()
    assert data["initial_balance"] == 1000
    assert data["house_edge"] == 0.9
    assert data["reveal_delay"] == 500


def test_create_game(client):
    response = client.post("/api/game/create", json={"balance": 300, "seed": 4})
    data = response.get_json()

    assert response.status_code == 200
    assert data["game_id"]
    assert data["state"]["balance"] == 300
    assert data["state"]["stage"] == -1


def test_create_game_rejects_negative_balance(client):
    response = client.post("/api/game/create", json={"balance": -1})
    assert response.status_code == 400
    assert "balance" in response.get_json()["error"]


def test_unknown_game_is_404(client):
    assert client.get("/api/game/nope/state").status_code == 404
    assert client.post("/api/game/nope/guess", json={"guess": "red"}).status_code == 404


def test_invalid_bets_are_rejected(client):
    game_id = create_game(client)

    for bet in (0, -10, 5000):
        response = client.post(f"/api/game/{game_id}/start", json={"bet": bet})
        data = response.get_json()
        assert response.status_code == 400
        assert data["error_type"] == "InvalidBetError"
        assert data["state"]["stage"] == -1
        assert data["state"]["balance"] == 1000


def test_guess_while_idle_is_rejected(client):
    game_id = create_game(client)
    response = client.post(f"/api/game/{game_id}/guess", json={"guess": "red"})

    assert response.status_code == 400
    assert response.get_json()["error_type"] == "EngineStateError"


def test_missing_guess_is_a_form_error(client):
    game_id = create_game(client)
    client.post(f"/api/game/{game_id}/start", json={"bet": 10})

    response = client.post(f"/api/game/{game_id}/guess", json={})
    assert response.status_code == 400
    assert "Guess is required" in response.get_json()["error"]


def test_round_through_the_api(client, manager):
    game_id = create_game(client)
    stack_game(manager, game_id, [C(5, "hearts"), C(9, "spades")])

    start = client.post(f"/api/game/{game_id}/start", json={"bet": 10}).get_json()
    assert start["ui_state"]["stage"] == 0
    assert start["ui_state"]["events"][0]["type"] == "round_started"

    early = client.post(f"/api/game/{game_id}/cashout")
    assert early.status_code == 400

    guess = client.post(f"/api/game/{game_id}/guess", json={"guess": "R"}).get_json()
    assert guess["outcome"]["result"] == "correct"
    assert guess["outcome"]["card"]["label"] == "5♥"
    assert guess["ui_state"]["payout_multiplier"] == 1.8

    state = client.get(f"/api/game/{game_id}/state").get_json()
    assert state["offered_guesses"] == ["higher", "lower"]
    assert state["odds"]["higher"]["payout"] == rules.compute_payout(36 / 51)

    cashout = client.post(f"/api/game/{game_id}/cashout").get_json()
    assert cashout["winnings"] == 18.0
    assert cashout["ui_state"]["balance"] == 1018.0
    assert cashout["ui_state"]["stage"] == -1

    stats = client.get(f"/api/game/{game_id}/stats").get_json()
    assert stats["wins"] == 1
    assert stats["highest_win"] == 18.0

    history = client.get(f"/api/game/{game_id}/history").get_json()["history"]
    assert history[0]["outcome"] == "cashout"
    assert history[0]["cards"] == ["5♥"]


def test_losing_guess_through_the_api(client, manager):
    game_id = create_game(client)
    stack_game(manager, game_id, [C(5, "clubs")])
    client.post(f"/api/game/{game_id}/start", json={"bet": 25})

    data = client.post(f"/api/game/{game_id}/guess", json={"guess": "red"}).get_json()

    assert data["outcome"]["result"] == "incorrect"
    assert data["outcome"]["loss"] == 25
    assert data["ui_state"]["balance"] == 975


def test_odds_endpoint(client):
    game_id = create_game(client)
    client.post(f"/api/game/{game_id}/start", json={"bet": 10})

    data = client.get(f"/api/game/{game_id}/odds").get_json()
    assert data["stage"] == 0
    assert data["odds"]["red"] == {"probability": 0.5, "payout": 1.8}


def test_delete_game(client):
    game_id = create_game(client)
    assert client.delete(f"/api/game/{game_id}").get_json() == {"ok": True}
    assert client.get(f"/api/game/{game_id}/state").status_code == 404


@pytest.mark.parametrize("guess", [5, True])
def test_non_text_guess_is_an_invalid_guess(client, guess):
    game_id = create_game(client)
    client.post(f"/api/game/{game_id}/start", json={"bet": 10})

    response = client.post(f"/api/game/{game_id}/guess", json={"guess": guess})

    assert response.status_code == 400
    assert response.get_json()["error_type"] == "InvalidGuessError"
    assert response.get_json()["state"]["stage"] == 0


def test_bet_object_is_a_form_error(client):
    game_id = create_game(client)
    response = client.post(f"/api/game/{game_id}/start", json={"bet": {"amount": 10}})

    assert response.status_code == 400
    assert "bet" in response.get_json()["error"]


def test_internal_key_errors_are_not_reported_as_missing_games(client, manager):
    game_id = create_game(client)

    def broken_deck(rng):
        raise KeyError("internal bug")

    manager.get_game(game_id).deck_factory = broken_deck

    with pytest.raises(KeyError, match="internal bug"):
        client.post(f"/api/game/{game_id}/start", json={"bet": 10})
