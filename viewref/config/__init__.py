from .load import load_config
from .model import ProjectConfig, DEFAULT_CONFIG
from .paths import CONFIG_FILE, config_path

__all__ = ["load_config", "ProjectConfig", "DEFAULT_CONFIG", "CONFIG_FILE", "config_path"]
