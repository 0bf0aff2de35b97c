import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CONFIG_PATH = "config/config.yaml"


class EnvSettings:
    @staticmethod
    def get_config_path() -> Path:
        config_path = Path(os.getenv("CONFIG_PATH") or DEFAULT_CONFIG_PATH)
        if config_path.is_absolute():
            return config_path

        return Path(__file__).resolve().parents[3] / config_path  # root


env_settings = EnvSettings()
