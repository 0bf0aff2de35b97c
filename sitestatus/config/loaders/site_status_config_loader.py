from sitestatus.config.loaders.env_loader import env_settings
from sitestatus.config.loaders.helpers.yaml_loading_helper import load_yaml
from sitestatus.config.models.app_config_model import AppConfig, ProbeConfig


def get_app_config() -> AppConfig:
    data = load_yaml(env_settings.get_config_path())
    return AppConfig(**data)


def get_probe_config() -> ProbeConfig:
    return get_app_config().probe
