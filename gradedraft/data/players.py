import numpy as np
import pandas as pd

from gradedraft.exceptions import PlayerNotFound

PLAYER_COLUMNS = ["player_id", "name", "class_code", "grade_percent", "study_hours"]

# -----------------------
# Data loading
# -----------------------


def load_players(path) -> pd.DataFrame:
    players = pd.read_csv(path, dtype={"player_id": str, "class_code": str})
    missing = set(PLAYER_COLUMNS) - set(players.columns)
    if missing:
        raise ValueError(f"Player file {path} is missing columns: {sorted(missing)}")

    return players.set_index("player_id")


def json_safe(val):
    """Convert Pandas/NumPy types and problematic floats to JSON-safe Python types."""
    if val is None or pd.isna(val):
        return None
    if isinstance(val, np.integer):
        return int(val)
    if isinstance(val, np.floating):
        return float(val) if np.isfinite(val) else None
    return val


class PlayerCatalog:
    def __init__(self, players: pd.DataFrame):
        self.players = players

    @classmethod
    def empty(cls):
        return cls(pd.DataFrame(columns=PLAYER_COLUMNS).set_index("player_id"))

    @classmethod
    def from_csv(cls, path):
        return cls(load_players(path))

    def __len__(self):
        return len(self.players)

    def __contains__(self, player_id):
        return str(player_id) in self.players.index

    def get(self, player_id):
        if player_id not in self:
            raise PlayerNotFound(f"Player {player_id} not found")
        return self._row(str(player_id), self.players.loc[str(player_id)])

    def describe(self, player_ids):
        """Catalog details for ``player_ids``, in the order given."""
        known = self.players.loc[self.players.index.intersection([str(p) for p in player_ids])]
        rows = {pid: self._row(pid, row) for pid, row in known.iterrows()}
        return [rows.get(str(pid), {"player_id": str(pid)}) for pid in player_ids]

    def class_pool(self, class_code):
        """Ids of every player in a class, for seeding a league's draft pool."""
        df = self.players[self.players["class_code"] == str(class_code)]
        return df.sort_values("name").index.tolist()

    @staticmethod
    def _row(player_id, row):
        return {
            "player_id": player_id,
            "name": json_safe(row["name"]),
            "class_code": json_safe(row["class_code"]),
            "grade_percent": json_safe(row["grade_percent"]),
            "study_hours": json_safe(row["study_hours"]),
        }
