import os
from typing import Optional

from pydantic import BaseModel, Field

# -----------------------
# Settings
# -----------------------


class Settings(BaseModel):
    sweep_interval: float = Field(default=10.0, gt=0)
    sweep_grace: float = Field(default=5.0, ge=0)
    sweeper_enabled: bool = True
    players_csv: Optional[str] = None
    log_level: str = "INFO"


def _env_flag(value):
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def load_settings(environ=None) -> Settings:
    env = os.environ if environ is None else environ

    values = {}
    if env.get("GRADEDRAFT_SWEEP_INTERVAL"):
        values["sweep_interval"] = float(env["GRADEDRAFT_SWEEP_INTERVAL"])
    if env.get("GRADEDRAFT_SWEEP_GRACE"):
        values["sweep_grace"] = float(env["GRADEDRAFT_SWEEP_GRACE"])
    if "GRADEDRAFT_SWEEPER_ENABLED" in env:
        values["sweeper_enabled"] = _env_flag(env["GRADEDRAFT_SWEEPER_ENABLED"])
    if env.get("GRADEDRAFT_PLAYERS_CSV"):
        values["players_csv"] = env["GRADEDRAFT_PLAYERS_CSV"]
    if env.get("GRADEDRAFT_LOG_LEVEL"):
        values["log_level"] = env["GRADEDRAFT_LOG_LEVEL"].upper()

    return Settings(**values)
