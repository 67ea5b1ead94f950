"""Engine configuration with optional TOML overrides."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field, fields
from typing import Any, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "chesscore.toml"


@dataclass
class SearchConfig:
    depth: int = 3
    use_pruning: bool = True
    use_ordering: bool = True
    seed: Optional[int] = None  # None means unseeded tie-breaking


@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = DEFAULT_CONFIG_PATH) -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as handle:
            data = tomllib.load(handle)

        cfg.search = _merge(cfg.search, data.get("search", {}))
        if "log_level" in data:
            cfg.log_level = str(data["log_level"]).upper()
        logger.debug("loaded config from %s", path)
        return cfg


def _merge(section: Any, values: dict[str, Any]) -> Any:
    known = {f.name for f in fields(section)}
    for key, value in values.items():
        if key in known:
            setattr(section, key, value)
        else:
            logger.warning("ignoring unknown config key %r", key)
    return section


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
