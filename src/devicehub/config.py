"""Configuration loader for the device hub."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values

from devicehub.registry.records import DEFAULT_PROPERTY_PREFIX

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "~/.devicehub/config.json"
DEFAULT_ENV_FILE = "~/.devicehub/.env"
DEFAULT_OWNER_ID = "assistant"
DEFAULT_AGENT_USER_ID = "devicehub-default"


@dataclass
class AssistantConfig:
    """Device hub configuration."""

    owner_id: str
    agent_user_id: str
    store_path: Path
    variables_path: Path
    property_prefix: str = DEFAULT_PROPERTY_PREFIX


def load_config(config_path: Optional[str] = None, env_file: Optional[str] = None) -> AssistantConfig:
    """Load configuration from file with environment variable overrides.

    Environment variables (also read from ~/.devicehub/.env):
        DEVICEHUB_CONFIG_PATH: Override config file location
        DEVICEHUB_OWNER_ID: Owner id of the device configuration
        DEVICEHUB_AGENT_USER_ID: Agent user id reported on sync
        DEVICEHUB_STORE_PATH: JSON file holding device records
        DEVICEHUB_VARIABLES_PATH: JSON file holding live variable values
        DEVICEHUB_PROPERTY_PREFIX: Prefix of the per-type property keys

    Args:
        config_path: Path to config JSON file. Defaults to ~/.devicehub/config.json
        env_file: Path to a dotenv file. Defaults to ~/.devicehub/.env

    Returns:
        AssistantConfig; a missing config file yields the defaults
    """
    env_path = Path(env_file or DEFAULT_ENV_FILE).expanduser()
    env = dict(os.environ)
    if env_path.exists():
        # A bare KEY line has no value
        dotenv = {k: v for k, v in dotenv_values(env_path).items() if v is not None}
        env = {**dotenv, **env}

    path_str = config_path or env.get("DEVICEHUB_CONFIG_PATH", DEFAULT_CONFIG_PATH)
    config_file = Path(path_str).expanduser()

    data = {}
    if config_file.exists():
        with open(config_file) as f:
            data = json.load(f)
    else:
        logger.info(f"No config at {config_file}, using defaults")

    config_dir = config_file.parent

    config = AssistantConfig(
        owner_id=env.get("DEVICEHUB_OWNER_ID", data.get("owner_id", DEFAULT_OWNER_ID)),
        agent_user_id=env.get(
            "DEVICEHUB_AGENT_USER_ID", data.get("agent_user_id", DEFAULT_AGENT_USER_ID)
        ),
        store_path=Path(
            env.get("DEVICEHUB_STORE_PATH", data.get("store_path", config_dir / "configuration.json"))
        ).expanduser(),
        variables_path=Path(
            env.get("DEVICEHUB_VARIABLES_PATH", data.get("variables_path", config_dir / "variables.json"))
        ).expanduser(),
        property_prefix=env.get(
            "DEVICEHUB_PROPERTY_PREFIX", data.get("property_prefix", DEFAULT_PROPERTY_PREFIX)
        ),
    )

    logger.info(f"Loaded config: owner={config.owner_id}, store={config.store_path}")
    return config
