import pickle
import random
import time
import uuid

import redis

from config import GameConfig, RedisConfig
from game.errors import GameNotFoundError
from game.engine import RoundEngine
from utils import safe_print


class GameManager:
    """
    Redis-backed game session manager for multi-worker deployments.
    Falls back to in-memory storage if Redis is unavailable (development).
    """

    def __init__(self, use_redis=True):
        self.use_redis = False
        self.games = {}

        if not use_redis:
            safe_print("[MANAGER] Redis disabled. Using in-memory storage.")
            return

        try:
            self.redis_client = redis.Redis(
                host=RedisConfig.HOST,
                port=RedisConfig.PORT,
                password=RedisConfig.PASSWORD,
                decode_responses=False,  # We'll use pickle for serialization
                socket_connect_timeout=RedisConfig.CONNECT_TIMEOUT
            )
            # Test connection
            self.redis_client.ping()
            self.use_redis = True
            safe_print(f"[MANAGER] Connected to Redis at {RedisConfig.HOST}:{RedisConfig.PORT}")
        except redis.exceptions.RedisError as e:
            safe_print(f"[MANAGER] Redis connection failed: {e}. Using in-memory storage.")

    def _key(self, game_id):
        return f"{RedisConfig.KEY_PREFIX}{game_id}"

    def _store(self, game_id, session_data):
        if self.use_redis:
            self.redis_client.setex(self._key(game_id), GameConfig.SESSION_TTL_SECONDS,
                                    pickle.dumps(session_data))
        else:
            self.games[game_id] = session_data

    def _load(self, game_id):
        if self.use_redis:
            serialized = self.redis_client.get(self._key(game_id))
            if not serialized:
                raise GameNotFoundError(f"Game {game_id} not found in Redis")
            return pickle.loads(serialized)

        session = self.games.get(game_id)
        if not session:
            raise GameNotFoundError(f"Game {game_id} not found")
        return session

    # -----------------------------
    # CREATE GAME
    # -----------------------------

    def create_game(self, balance=None, seed=None):
        """
        Creates a new game session and returns (game_id, engine).
        """
        game_id = str(uuid.uuid4())

        engine = RoundEngine(
            balance=GameConfig.INITIAL_BALANCE if balance is None else balance,
            rng=random.Random(seed),
        )

        session_data = {
            "engine": engine,
            "created_at": time.time(),
            "status": "active",
        }
        self._store(game_id, session_data)

        where = "Redis" if self.use_redis else "memory"
        safe_print(f"[MANAGER] Created game {game_id} in {where}")

        return game_id, engine

    # -----------------------------
    # GET GAME
    # -----------------------------

    def get_game(self, game_id):
        return self._load(game_id)["engine"]

    # -----------------------------
    # UPDATE GAME (Important!)
    # -----------------------------

    def update_game(self, game_id, engine):
        """
        Updates the game state in storage after modifications.
        MUST be called after any game state changes!
        """
        session_data = self._load(game_id)
        session_data["engine"] = engine
        self._store(game_id, session_data)

    # -----------------------------
    # DELETE GAME
    # -----------------------------

    def delete_game(self, game_id):
        if self.use_redis:
            deleted = self.redis_client.delete(self._key(game_id))
        else:
            deleted = self.games.pop(game_id, None) is not None

        if not deleted:
            raise GameNotFoundError(f"Game {game_id} not found")
        safe_print(f"[MANAGER] Deleted game {game_id}")

    # -----------------------------
    # LIST GAMES (DEBUG / ADMIN)
    # -----------------------------

    def _summary(self, data):
        engine = data["engine"]
        return {
            "status": data["status"],
            "age": time.time() - data["created_at"],
            "stage": engine.round.stage,
            "balance": engine.wallet.balance,
            "rounds_played": engine.rounds_played,
        }

    def list_games(self):
        if self.use_redis:
            games = {}
            for key in self.redis_client.scan_iter(f"{RedisConfig.KEY_PREFIX}*"):
                game_id = key.decode('utf-8').split(':', 1)[1]
                serialized = self.redis_client.get(key)
                if serialized is None:
                    # expired between scan and get
                    continue
                games[game_id] = self._summary(pickle.loads(serialized))
            return games

        return {gid: self._summary(data) for gid, data in self.games.items()}
