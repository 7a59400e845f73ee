# tictac3d/core/config.py
import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .constants import DEFAULT_TABLE_SIZE, DEFAULT_CACHE_CAPACITY

load_dotenv()

# Repository root, so the file is found whatever the working directory
DEFAULT_CONFIG_PATH = str(Path(__file__).resolve().parents[2] / "config" / "solver.yaml")

# Environment variable -> SolverConfig field
ENV_OVERRIDES = {
    "TICTAC3D_TABLE_SIZE": "table_size",
    "TICTAC3D_CACHE_CAPACITY": "cache_capacity",
    "TICTAC3D_SEED": "seed",
    "TICTAC3D_LOG_LEVEL": "log_level",
}

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class SolverConfig(BaseModel):
    table_size: int = Field(DEFAULT_TABLE_SIZE, gt=0, description="Number of hash buckets.")
    cache_capacity: int = Field(DEFAULT_CACHE_CAPACITY, gt=0, description="Max cached positions.")
    seed: Optional[int] = Field(None, description="Tie-break RNG seed; None draws from the OS.")
    log_level: LogLevel = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


def load_config(path: Optional[str] = None) -> SolverConfig:
    """
    Reads settings from YAML (a missing file means defaults), then applies
    TICTAC3D_* environment overrides.
    """
    path = path or os.getenv("TICTAC3D_CONFIG", DEFAULT_CONFIG_PATH)
    data: Dict[str, Any] = {}
    if Path(path).is_file():
        with open(path, "r") as f:
            data = (yaml.safe_load(f) or {}).get("solver", {})

    for env_key, field in ENV_OVERRIDES.items():
        value = os.getenv(env_key)
        if value:
            data[field] = value

    return SolverConfig(**data)


def configure_logging(config: SolverConfig):
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
