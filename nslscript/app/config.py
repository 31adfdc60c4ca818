from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path


logger = logging.getLogger(__name__)


@dataclass
class CliConfig:
    output_path: str = "script.nsl"
    listing_path: str | None = None
    log_level: str | None = None


@dataclass
class AppConfig:
    cli: CliConfig = field(default_factory=CliConfig)

    @classmethod
    def default(cls) -> AppConfig:
        return cls()


class ConfigManager:
    def __init__(self, config_path: Path | str = "nslscript.json") -> None:
        self.config_path = Path(config_path)
        self.config = self.load()

    def load(self) -> AppConfig:
        if not self.config_path.exists():
            logger.info("Config file not found at %s, using defaults.", self.config_path)
            return AppConfig.default()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            cli_data = data.get("cli", {})
            return AppConfig(
                cli=CliConfig(
                    output_path=cli_data.get("output_path", "script.nsl"),
                    listing_path=cli_data.get("listing_path"),
                    log_level=cli_data.get("log_level"),
                )
            )
        except (OSError, ValueError, AttributeError) as e:
            logger.error("Failed to load config from %s: %s", self.config_path, e)
            return AppConfig.default()

    def save(self) -> None:
        try:
            with open(self.config_path, "w", encoding="utf-8") as f:
                json.dump(asdict(self.config), f, indent=4)
        except OSError as e:
            logger.error("Failed to save config: %s", e)

    @property
    def output_path(self) -> str:
        return self.config.cli.output_path

    @output_path.setter
    def output_path(self, value: str) -> None:
        self.config.cli.output_path = value
        self.save()

    @property
    def listing_path(self) -> str | None:
        return self.config.cli.listing_path

    @listing_path.setter
    def listing_path(self, value: str | None) -> None:
        self.config.cli.listing_path = value
        self.save()

    @property
    def log_level(self) -> str | None:
        return self.config.cli.log_level
