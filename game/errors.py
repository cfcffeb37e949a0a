"""
Engine errors.
Every error is local to one operation and leaves the engine in its prior state.
"""


class EngineError(Exception):
    """Base class for errors surfaced by the round engine"""


class InvalidBetError(EngineError):
    """Bet is not a positive amount covered by the balance"""


class EngineStateError(EngineError):
    """Operation is not allowed in the current round state"""


class InvalidGuessError(EngineError):
    """Guess token does not belong to the current stage"""


class DegenerateOddsError(EngineError):
    """Guess has zero probability, so its payout is undefined"""


class GameNotFoundError(KeyError):
    """No stored session for the requested game id"""

    def __str__(self):
        return self.args[0] if self.args else "Game not found"
