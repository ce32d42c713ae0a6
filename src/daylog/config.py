"""
Configuration module

Related:
  - ollama_client.OllamaClient: consumes the Ollama settings
  - src.server.dependencies: builds the ledger service and summarizer from this
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_DB_PATH = "data/daylog.db"


@dataclass
class OllamaConfig:
    """Ollama API settings"""

    host: str = "http://localhost:11434"
    model: str = "qwen3:8b"


@dataclass
class LedgerConfig:
    """Activity ledger storage settings"""

    db_path: str = DEFAULT_DB_PATH

    def resolved_db_path(self) -> Path:
        """Return the database path, honouring DAYLOG_DB_PATH and making relative paths project-rooted."""
        env_path = os.getenv("DAYLOG_DB_PATH")
        path = Path(env_path) if env_path else Path(self.db_path)
        if not path.is_absolute():
            path = PROJECT_ROOT / path
        return path


@dataclass
class Config:
    """Application settings"""

    ollama: OllamaConfig = None  # type: ignore

    ledger: LedgerConfig = None  # type: ignore

    # Logging
    log_level: str = "INFO"
    log_file: str = "logs/daylog.log"

    # Mood generation
    max_tokens: int = 300
    temperature: float = 0.7

    def __post_init__(self):
        if self.ollama is None:
            self.ollama = OllamaConfig()
        if self.ledger is None:
            self.ledger = LedgerConfig()

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "Config":
        """Load settings from a YAML file.

        Args:
            config_path: Settings file (defaults to config/app_config.yaml)

        Returns:
            Config: populated settings; defaults when the file does not exist
        """
        if config_path is None:
            config_path = PROJECT_ROOT / "config" / "app_config.yaml"

        config_path = Path(config_path)
        if not config_path.exists():
            return cls()

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data: Dict[str, Any] = yaml.safe_load(f) or {}

        ollama_data = yaml_data.get("ollama", {})
        ledger_data = yaml_data.get("ledger", {})
        log_data = yaml_data.get("log", {})
        ai_data = yaml_data.get("ai", {})

        return cls(
            ollama=OllamaConfig(
                host=ollama_data.get("host", "http://localhost:11434"),
                model=ollama_data.get("model", "qwen3:8b"),
            ),
            ledger=LedgerConfig(
                db_path=ledger_data.get("db_path", DEFAULT_DB_PATH),
            ),
            log_level=log_data.get("level", "INFO"),
            log_file=log_data.get("file", "logs/daylog.log"),
            max_tokens=ai_data.get("max_tokens", 300),
            temperature=ai_data.get("temperature", 0.7),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """Load settings from environment variables."""
        return cls(
            ollama=OllamaConfig(
                host=os.getenv("OLLAMA_HOST", "http://localhost:11434"),
                model=os.getenv("OLLAMA_MODEL", "qwen3:8b"),
            ),
            ledger=LedgerConfig(
                db_path=os.getenv("DAYLOG_DB_PATH", DEFAULT_DB_PATH),
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", "logs/daylog.log"),
            max_tokens=int(os.getenv("MAX_TOKENS", "300")),
            temperature=float(os.getenv("TEMPERATURE", "0.7")),
        )
