"""Application settings loader from YAML configuration."""
import os
import yaml
from pathlib import Path
from typing import Optional
from dataclasses import dataclass

from ..utils.exceptions import ConfigError

SETTINGS_ENV_VAR = "EXPENSE_FORECASTER_SETTINGS"
DEFAULT_SETTINGS_PATH = Path(__file__).parent.parent / "config.yaml"


@dataclass
class AppSettings:
    """Application-wide settings loaded from config.yaml."""
    
    # App info
    app_name: str
    app_version: str
    
    # Logging
    log_level: str
    log_file: Optional[str]
    log_max_file_size_mb: int
    log_backup_count: int
    
    # Parser
    delimiter: str
    
    # Forecast
    forecast_window_months: int
    top_changes: int
    income_category: str
    
    # LLM
    llm_model_name: str
    llm_timeout_seconds: int
    llm_max_retries: int
    llm_initial_delay_seconds: float
    llm_backoff_factor: int
    
    @classmethod
    def load(cls, config_path: Path = None) -> "AppSettings":
        """Load settings from YAML file."""
        if config_path is None:
            override = os.getenv(SETTINGS_ENV_VAR)
            config_path = Path(override) if override else DEFAULT_SETTINGS_PATH
        
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")
        
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}")
        
        try:
            return cls(
                app_name=config["app"]["name"],
                app_version=config["app"]["version"],
                log_level=config["logging"]["level"],
                log_file=config["logging"].get("file") or None,
                log_max_file_size_mb=config["logging"]["max_file_size_mb"],
                log_backup_count=config["logging"]["backup_count"],
                delimiter=config["parser"]["delimiter"],
                forecast_window_months=config["forecast"]["window_months"],
                top_changes=config["forecast"]["top_changes"],
                income_category=config["forecast"]["income_category"],
                llm_model_name=config["llm"]["model_name"],
                llm_timeout_seconds=config["llm"]["timeout_seconds"],
                llm_max_retries=config["llm"]["max_retries"],
                llm_initial_delay_seconds=config["llm"]["initial_delay_seconds"],
                llm_backoff_factor=config["llm"]["backoff_factor"]
            )
        except (KeyError, TypeError) as e:
            raise ConfigError(f"Missing setting in {config_path}: {e}")


# Global settings instance
_settings: AppSettings = None


def get_settings() -> AppSettings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings.load()
    return _settings
