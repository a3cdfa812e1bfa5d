import os
from importlib import resources
from pathlib import Path

import tomli as toml

from c2cs import logging as c2cs_logging

logger = c2cs_logging.get_logger(__name__)


def _merge_configs(config, default_config):
    config_out = {}

    for key, default_value in default_config.items():
        if key in config:
            if isinstance(config[key], dict) and isinstance(default_value, dict):
                config_out[key] = _merge_configs(config[key], default_value)
            elif isinstance(config[key], dict) or isinstance(default_value, dict):
                raise TypeError(f"Type mismatch for key '{key}': "
                                f"config has {type(config[key])}, default_config has {type(default_value)}")
            # Otherwise, config[key] takes precedence
            else:
                config_out[key] = config[key]
        else:
            config_out[key] = default_value

    # Add keys that are only in config
    for key, value in config.items():
        if key not in default_config:
            config_out[key] = value

    return config_out


def load_default_config():
    """Load the bundled default configuration from packaged resources."""
    resource_dir = Path(__file__).resolve().parent / "_resources"
    candidate = resource_dir / "c2cs.default.toml"
    if candidate.is_file():
        with open(candidate, "rb") as f:
            return toml.load(f)

    raise FileNotFoundError("Could not load _resources/c2cs.default.toml")


def load_model_schema_text() -> str:
    """Return the C model JSON schema text from packaged resources.

    Raises FileNotFoundError if the schema cannot be located.
    """
    try:
        schema_resource = resources.files("c2cs.c_model").joinpath("schema.json")
        with schema_resource.open("r", encoding="utf-8") as f:
            return f.read()
    except (FileNotFoundError, ModuleNotFoundError):
        pass

    fallback = Path(__file__).resolve().parent / "c_model" / "schema.json"
    if fallback.is_file():
        return fallback.read_text(encoding="utf-8")

    raise FileNotFoundError("Could not locate c_model/schema.json")


def try_load_config(config_file=None):
    """Load user configuration merged with defaults.

    Resolution order:
    1. Explicit `config_file` argument.
    2. `C2CS_CONFIG` environment variable.
    3. `./c2cs.toml` relative to current working directory.
    If none are found, return the default config alone.
    """
    default_config = load_default_config()

    def _load_user_config(path: Path) -> dict:
        with open(path, "rb") as f:
            return toml.load(f)

    if config_file:
        candidate = Path(config_file).expanduser()
        if not candidate.is_file():
            raise FileNotFoundError(f"Could not find config file {candidate}")
        user_config = _load_user_config(candidate)
        return _merge_configs(user_config, default_config)

    env_candidate = os.environ.get("C2CS_CONFIG")
    if env_candidate:
        env_path = Path(env_candidate).expanduser()
        if not env_path.is_file():
            raise FileNotFoundError(f"C2CS_CONFIG={env_candidate} does not point to a readable file")
        user_config = _load_user_config(env_path)
        return _merge_configs(user_config, default_config)

    cwd_candidate = Path.cwd() / "c2cs.toml"
    if cwd_candidate.is_file():
        user_config = _load_user_config(cwd_candidate)
        return _merge_configs(user_config, default_config)

    logger.info("No user config found; falling back to default configuration only")
    return default_config


def save_code(path, code):
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(code)
