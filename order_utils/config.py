"""Exchange configuration — dataclass with config.json > env > defaults."""

import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path

from .constants import POLYGON, get_exchange_address

logger = logging.getLogger(__name__)

_ENV_MAP = {
    "private_key": "POLY_PRIVATE_KEY",
    "chain_id": "POLY_CHAIN_ID",
    "neg_risk": "POLY_NEG_RISK",
    "exchange_address": "POLY_EXCHANGE_ADDRESS",
}


@dataclass
class Config:
    # Auth
    private_key: str = ""

    # Deployment
    chain_id: int = POLYGON
    neg_risk: bool = False
    exchange_address: str = ""           # empty = known deployment for chain_id

    @classmethod
    def load(cls, config_dir: str) -> "Config":
        config_path = Path(config_dir) / "config.json"
        file_cfg: dict = {}
        if config_path.exists():
            try:
                with open(config_path) as f:
                    file_cfg = json.load(f)
            except (json.JSONDecodeError, IOError) as exc:
                logger.warning("Failed to load %s: %s", config_path, exc)

        kwargs: dict = {}
        field_types = {f.name: f.type for f in fields(cls)}

        for f in fields(cls):
            name = f.name
            if name in file_cfg:
                kwargs[name] = _coerce(file_cfg[name], field_types[name])
            elif name in _ENV_MAP:
                env_val = os.environ.get(_ENV_MAP[name])
                if env_val is not None:
                    kwargs[name] = _coerce(env_val, field_types[name])

        return cls(**kwargs)

    def save(self, config_dir: str) -> None:
        config_path = Path(config_dir) / "config.json"
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data.pop("private_key", None)  # Never persist the private key
        with open(config_path, "w") as f:
            json.dump(data, f, indent=2)
        logger.info("Config saved to %s", config_path)

    def update(self, overrides: dict) -> None:
        field_types = {f.name: f.type for f in fields(self)}
        for key, value in overrides.items():
            if key not in field_types:
                logger.warning("Unknown config key: %s", key)
                continue
            setattr(self, key, _coerce(value, field_types[key]))

    def resolve_exchange_address(self) -> str:
        """Explicit exchange_address if set, else the known deployment."""
        if self.exchange_address:
            return self.exchange_address
        return get_exchange_address(self.chain_id, self.neg_risk)


def _coerce(value, type_hint):
    if type_hint == "bool" or type_hint is bool:
        if isinstance(value, bool):
            return value
        return str(value).lower() in ("true", "1", "yes")
    if type_hint == "int" or type_hint is int:
        return int(value)
    return str(value)
