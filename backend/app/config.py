from __future__ import annotations

import logging
import os
from dataclasses import dataclass

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    dice_seed: int | None = None
    dev_mode: bool = False
    log_level: str | None = None

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            dice_seed=_optional_int("DICE_SEED"),
            dev_mode=os.getenv("DEV_MODE", "").strip().lower() in {"1", "true"},
            log_level=os.getenv("LOG_LEVEL") or None,
        )

    def resolved_log_level(self) -> int:
        if self.log_level:
            level = logging.getLevelName(self.log_level.strip().upper())
            if isinstance(level, int):
                return level
        return logging.DEBUG if self.dev_mode else logging.INFO

    def redacted(self) -> dict:
        return {
            "dice_seed": "set" if self.dice_seed is not None else None,
            "dev_mode": self.dev_mode,
            "log_level": logging.getLevelName(self.resolved_log_level()),
        }


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.resolved_log_level(), format=LOG_FORMAT)
