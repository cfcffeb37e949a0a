import os

from flask import Flask, jsonify

from config import FlaskConfig, GameConfig
from controllers.flask_controller import FlaskGameController
from Forms import BetForm, CreateGameForm, GuessForm, form_errors
from game.errors import GameNotFoundError
from game.manager import GameManager
from utils import safe_print

app = Flask(__name__)
app.config.from_object(FlaskConfig)

# -----------------------------
# GAME MANAGER (GLOBAL)
# -----------------------------

manager = GameManager(use_redis=os.getenv('USE_REDIS', '1') != '0')


@app.errorhandler(GameNotFoundError)
def game_not_found(error):
    safe_print(f"[APP] {error}")
    return jsonify({'success': False, 'error': 'Game not found'}), 404


def _invalid_form(form):
    return jsonify({'success': False, 'error': form_errors(form)}), 400


# -----------------------------
# ROUTES
# -----------------------------

@app.route("/api/config")
def game_config():
    return jsonify(GameConfig.public_settings())


# -----------------------------
# GAME LIFECYCLE
# -----------------------------

@app.route("/api/game/create", methods=["POST"])
def create_game():
    form = CreateGameForm()
    if not form.validate():
        return _invalid_form(form)

    game_id, engine = manager.create_game(balance=form.balance.data, seed=form.seed.data)
    return jsonify({
        "game_id": game_id,
        "state": engine.get_state()
    })


@app.route("/api/game/<game_id>", methods=["DELETE"])
def delete_game(game_id):
    manager.delete_game(game_id)
    return jsonify({'ok': True})


@app.route("/api/game/<game_id>/state")
def game_state(game_id):
    engine = manager.get_game(game_id)
    return FlaskGameController(engine).get_state()


@app.route("/api/game/<game_id>/odds")
def game_odds(game_id):
    engine = manager.get_game(game_id)
    return FlaskGameController(engine).get_odds()


@app.route("/api/game/<game_id>/stats")
def game_stats(game_id):
    engine = manager.get_game(game_id)
    return FlaskGameController(engine).get_stats()


@app.route("/api/game/<game_id>/history")
def game_history(game_id):
    engine = manager.get_game(game_id)
    return FlaskGameController(engine).get_history()


# -----------------------------
# GAME ACTIONS
# -----------------------------

@app.route("/api/game/<game_id>/start", methods=["POST"])
def start_round(game_id):
    engine = manager.get_game(game_id)
    form = BetForm()
    if not form.validate():
        return _invalid_form(form)

    result = FlaskGameController(engine).start_round(form.bet.data)

    # Save updated state back to storage
    manager.update_game(game_id, engine)

    return result


@app.route("/api/game/<game_id>/guess", methods=["POST"])
def guess(game_id):
    engine = manager.get_game(game_id)
    form = GuessForm()
    if not form.validate():
        return _invalid_form(form)

    result = FlaskGameController(engine).guess(form.guess.data)

    # Save updated state back to storage
    manager.update_game(game_id, engine)

    return result


@app.route("/api/game/<game_id>/cashout", methods=["POST"])
def cash_out(game_id):
    engine = manager.get_game(game_id)
    result = FlaskGameController(engine).cash_out()

    # Save updated state back to storage
    manager.update_game(game_id, engine)

    return result


@app.route("/api/games")
def list_games():
    return jsonify(manager.list_games())


if __name__ == "__main__":
    app.run(debug=True)
