"""
Game Configuration
Centralized settings for the Ride the Bus card game
"""
import os


class GameConfig:
    """Core game configuration"""

    # Wallet settings
    INITIAL_BALANCE = 1000
    DEFAULT_BET = 10

    # Payout = (1 / probability) * HOUSE_EDGE, so 10% is kept by the house
    HOUSE_EDGE = 0.9

    # Presentation only: milliseconds before a resolved guess becomes actionable
    REVEAL_DELAY = 500

    # Number of resolved rounds kept in the engine history
    HISTORY_LIMIT = 10

    # Session storage
    SESSION_TTL_SECONDS = 86400

    # Round outcomes
    OUTCOME_WIN = 'win'
    OUTCOME_CASHOUT = 'cashout'
    OUTCOME_LOSS = 'loss'

    @staticmethod
    def reveal_delay_seconds():
        """Reveal delay converted for time.sleep"""
        return GameConfig.REVEAL_DELAY / 1000.0

    @staticmethod
    def public_settings():
        """Constants the presentation layer is allowed to see"""
        return {
            'initial_balance': GameConfig.INITIAL_BALANCE,
            'default_bet': GameConfig.DEFAULT_BET,
            'house_edge': GameConfig.HOUSE_EDGE,
            'reveal_delay': GameConfig.REVEAL_DELAY,
        }


class RedisConfig:
    """Redis connection settings for the session manager"""
    HOST = os.getenv('REDIS_HOST', 'localhost')
    PORT = int(os.getenv('REDIS_PORT', 6379))
    PASSWORD = os.getenv('REDIS_PASSWORD', None)
    CONNECT_TIMEOUT = 2
    KEY_PREFIX = 'game:'


class FlaskConfig:
    """Flask application settings"""
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-ride-the-bus-secret')
    # JSON API only, forms are validated without CSRF tokens
    WTF_CSRF_ENABLED = False
