"""Configuration module."""
from .manager import Config, ConfigManager
from .settings import AppSettings, get_settings

__all__ = ["Config", "ConfigManager", "AppSettings", "get_settings"]
