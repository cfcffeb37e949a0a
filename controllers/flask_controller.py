from flask import jsonify

from game.errors import EngineError
from utils import safe_print


class FlaskGameController:
    def __init__(self, engine):
        self.engine = engine

    def _error(self, error):
        safe_print(f"[FLASK_CTRL] {type(error).__name__}: {error}")
        return jsonify({
            'success': False,
            'error': str(error),
            'error_type': type(error).__name__,
            'state': self.engine.get_state()
        }), 400

    def get_state(self):
        return jsonify({
            **self.engine.get_state(),
            'offered_guesses': self.engine.get_offered_guesses(),
            'odds': self.engine.get_payout_table()
        })

    def get_odds(self):
        return jsonify({
            'stage': self.engine.round.stage,
            'odds': self.engine.get_payout_table()
        })

    def get_stats(self):
        return jsonify(self.engine.get_stats())

    def get_history(self):
        return jsonify({'history': self.engine.get_history()})

    def start_round(self, bet):
        safe_print(f"[FLASK_CTRL] Start request - Bet: {bet}, Balance: {self.engine.wallet.balance}")
        try:
            self.engine.start_round(bet)
        except EngineError as e:
            return self._error(e)
        return jsonify({'success': True, 'ui_state': self.engine.consume_ui_state()})

    def guess(self, guess):
        safe_print(f"[FLASK_CTRL] Guess request - Stage: {self.engine.round.stage}, Guess: {guess}")
        try:
            outcome = self.engine.submit_guess(guess)
        except EngineError as e:
            return self._error(e)

        # Return transient UI state (and consume it) so the frontend can stage the reveal
        return jsonify({'success': True, 'outcome': outcome.to_dict(), 'ui_state': self.engine.consume_ui_state()})

    def cash_out(self):
        safe_print(f"[FLASK_CTRL] Cashout request - Stage: {self.engine.round.stage}")
        try:
            winnings = self.engine.cash_out()
        except EngineError as e:
            return self._error(e)
        return jsonify({'success': True, 'winnings': winnings, 'ui_state': self.engine.consume_ui_state()})
