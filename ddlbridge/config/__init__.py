import yaml
from pathlib import Path
import os
import logging

PACKAGE_DIR = Path(__file__).parent.parent
PROJECT_ROOT = PACKAGE_DIR.parent
SETTINGS_PATH = PACKAGE_DIR / 'settings.yaml'

# Environment variable -> (section, key) it overrides.
ENV_OVERRIDES = {
    'DDLBRIDGE_LOG_DIR': ('base_dirs', 'logs'),
    'DDLBRIDGE_DEFAULT_TARGET': ('conversion', 'default_target'),
}


def _apply_env_overrides(config_data: dict) -> None:
    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            config_data.setdefault(section, {})[key] = value


def _resolve_base_dirs(base_dirs: dict) -> dict:
    """Make every relative ``base_dirs`` entry absolute against the project root."""
    resolved = {}
    for key, path_str in base_dirs.items():
        if isinstance(path_str, str) and not os.path.isabs(path_str):
            resolved[key] = str((PROJECT_ROOT / path_str).resolve())
        else:
            resolved[key] = path_str
    return resolved


def load_config(settings_path: Path = SETTINGS_PATH) -> dict:
    """Load configuration from settings.yaml located in the package directory."""
    if not settings_path.exists():
        logging.error(f"Critical: settings.yaml not found at expected path: {settings_path}")
        raise FileNotFoundError(f"settings.yaml not found at {settings_path}")

    try:
        with open(settings_path, encoding='utf-8') as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logging.error(f"Error parsing {settings_path}: {e}", exc_info=True)
        raise Exception(f"Failed to load application configuration: {e}") from e

    if not config_data:
        config_data = {}
        logging.warning(f"settings.yaml at {settings_path} is empty or invalid.")

    _apply_env_overrides(config_data)

    if 'base_dirs' not in config_data:
        logging.info("'base_dirs' not found in settings.yaml.")
    config_data['base_dirs'] = _resolve_base_dirs(config_data.get('base_dirs') or {})
    config_data.setdefault('conversion', {})
    return config_data


# Load config at import time
try:
    config = load_config()
except Exception as e:
    logging.critical(f"CRITICAL FAILURE: Could not load application settings. Error: {e}", exc_info=True)
    raise SystemExit(f"Application cannot start due to configuration load failure: {e}")
