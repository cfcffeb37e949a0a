"""
Stats Model
In-memory win/loss statistics for one game session
"""


class Stats:
    """Accumulates round results. Never reset during a session."""

    def __init__(self):
        self.wins = 0
        self.losses = 0
        self.highest_win = 0.0
        self.total_games = 0

    def record(self, won: bool, amount: float = 0):
        """Update statistics after a round"""
        self.total_games += 1
        if won:
            self.wins += 1
            self.highest_win = max(self.highest_win, amount)
        else:
            self.losses += 1

    def get_win_rate(self) -> float:
        """Calculate win rate percentage"""
        if self.total_games == 0:
            return 0.0
        return (self.wins / self.total_games) * 100

    def to_dict(self):
        return {
            'wins': self.wins,
            'losses': self.losses,
            'highest_win': self.highest_win,
            'total_games': self.total_games,
            'win_rate': round(self.get_win_rate(), 1)
        }
