"""User configuration: Gemini credentials and runtime overrides."""
import json
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

from ..utils.exceptions import ConfigError
from ..utils.logger import get_logger

logger = get_logger()

HOME_ENV_VAR = "EXPENSE_FORECASTER_HOME"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """User configuration."""
    gemini_api_key: Optional[str] = None
    model_name: str = "gemini-2.5-flash"
    log_level: str = "INFO"


class ConfigManager:
    """Loads user configuration from an optional JSON file and the environment."""
    
    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            override = os.getenv(HOME_ENV_VAR)
            config_dir = Path(override) if override else Path.home() / ".expense_forecaster"
        self.config_dir = Path(config_dir)
        self.config_file = self.config_dir / "config.json"
    
    def load_config(self, defaults: Optional[Config] = None) -> Config:
        """
        Load configuration.
        
        Values come from, in increasing priority: ``defaults``, the JSON
        config file, then environment variables.
        
        Args:
            defaults: Base configuration (usually derived from AppSettings)
            
        Returns:
            Config object
        """
        values = dict(vars(defaults)) if defaults else {}
        values.update(self._load_file())
        values.update(self._load_env())
        return Config(**values)
    
    def validate_config(self, config: Config) -> tuple[bool, str]:
        """Validate configuration values."""
        if not config.model_name:
            return False, "Model name is required"
        
        if str(config.log_level).upper() not in VALID_LOG_LEVELS:
            return False, f"Invalid log level: {config.log_level}"
        
        if not config.gemini_api_key:
            return True, "Gemini API key not set; AI insights are disabled"
        
        return True, "Configuration is valid"
    
    def _load_file(self) -> dict:
        """Read the JSON config file, keeping only known fields."""
        if not self.config_file.exists():
            return {}
        
        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Failed to load configuration: {e}")
        
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file must hold a JSON object: {self.config_file}")
        
        known = {f.name for f in fields(Config)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {sorted(unknown)}")
        return {key: value for key, value in data.items() if key in known}
    
    @staticmethod
    def _load_env() -> dict:
        """Collect overrides from environment variables."""
        values = {}
        api_key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
        if api_key:
            values["gemini_api_key"] = api_key
        if os.getenv("EXPENSE_FORECASTER_MODEL"):
            values["model_name"] = os.getenv("EXPENSE_FORECASTER_MODEL")
        if os.getenv("EXPENSE_FORECASTER_LOG_LEVEL"):
            values["log_level"] = os.getenv("EXPENSE_FORECASTER_LOG_LEVEL")
        return values
