from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _load_yaml_config() -> dict:
    cfg_path = PROJECT_ROOT / "config.yaml"
    if not cfg_path.exists():
        return {}
    with open(cfg_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    # LLM
    llm_provider: str = "gemini"
    llm_model: str = "gemini-2.5-flash"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 2000
    llm_json_mode: bool = True

    # API key (required at request time, not at startup)
    GEMINI_API_KEY: Optional[str] = None

    # Presentation: None means call the analysis endpoint in-process
    api_base_url: Optional[str] = None
    api_timeout: float = 60.0

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def __init__(self, **kwargs):
        cfg = _load_yaml_config()
        llm = (cfg.get("llm") or {})
        presentation = (cfg.get("presentation") or {})
        logging_cfg = (cfg.get("logging") or {})

        values = {
            "llm_provider": llm.get("provider", "gemini"),
            "llm_model": llm.get("model", "gemini-2.5-flash"),
            "llm_temperature": llm.get("temperature", 0.7),
            "llm_max_tokens": llm.get("max_tokens", 2000),
            "llm_json_mode": llm.get("json_mode", True),
            "api_base_url": presentation.get("api_base_url"),
            "api_timeout": presentation.get("timeout", 60.0),
            "log_level": logging_cfg.get("level", "INFO"),
        }
        values.update(kwargs)
        super().__init__(**values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
