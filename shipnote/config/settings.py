"""Configuration management for Shipnote."""

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


ENV_PREFIX = "SHIPNOTE_"

DEFAULT_PUBLISH_COMMAND = "python -m twine upload dist/*"


class Config(BaseSettings):
    """Configuration settings for Shipnote."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, case_sensitive=False)

    gitlab_host: str = "https://gitlab.com"
    gitlab_token: Optional[str] = None
    project: Optional[str] = None
    branch: Optional[str] = None
    changelog_file: str = "CHANGELOG.md"
    version_file: str = "pyproject.toml"
    package_name: Optional[str] = None
    publish_command: str = DEFAULT_PUBLISH_COMMAND
    webex_token: Optional[str] = None
    webex_room_id: Optional[str] = None
    tag_wait_attempts: int = 5
    tag_wait_backoff: float = 1.0
    config_file: Optional[str] = None

    @field_validator('gitlab_host')
    @classmethod
    def normalize_gitlab_host(cls, v):
        """Ensure GitLab host has proper protocol."""
        if v and not v.startswith(('http://', 'https://')):
            v = f"https://{v}"
        return v.rstrip('/') if v else v

    @field_validator('tag_wait_attempts')
    @classmethod
    def check_tag_wait_attempts(cls, v):
        if v < 1:
            raise ValueError("tag_wait_attempts must be at least 1")
        return v


def load_json_config(config_path: str) -> dict:
    """Load configuration from JSON file.

    Args:
        config_path: Path to JSON configuration file

    Returns:
        Configuration dictionary

    Raises:
        ValueError: If the file is missing or is not valid JSON
    """
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        raise ValueError(f"Error loading config file {config_path}: {e}")


def find_config_file() -> Optional[str]:
    """Find configuration file in common locations.

    Returns:
        Path to config file or None if not found
    """
    search_paths = [
        "shipnote.json",
        ".shipnote.json",
        "~/.shipnote.json",
        "~/.config/shipnote/config.json",
    ]

    for path_str in search_paths:
        path = Path(path_str).expanduser()
        if path.exists() and path.is_file():
            return str(path)

    return None


def get_config(config_file: Optional[str] = None) -> Config:
    """Load configuration from environment variables and/or JSON file.

    Environment variables take precedence over values from the JSON file.

    Args:
        config_file: Optional path to JSON config file

    Returns:
        Configuration object

    Raises:
        ValueError: If an explicitly given config file cannot be loaded
    """
    config_data = {}

    json_config_path = config_file or find_config_file()
    if json_config_path:
        try:
            json_config = load_json_config(json_config_path)
        except ValueError:
            # An explicit path must load, a discovered one is best effort
            if config_file:
                raise
            json_config = {}
        config_data.update(
            {k: v for k, v in json_config.items() if k in Config.model_fields}
        )
        config_data['config_file'] = json_config_path

    env_config = {
        name: os.getenv(f"{ENV_PREFIX}{name.upper()}")
        for name in Config.model_fields
        if name != 'config_file'
    }
    env_config = {k: v for k, v in env_config.items() if v is not None}
    config_data.update(env_config)

    return Config(**config_data)


def create_sample_config(path: str = "shipnote.json") -> None:
    """Create a sample configuration file.

    Args:
        path: Path where to create the sample config file
    """
    sample_config = {
        "gitlab_host": "https://gitlab.com",
        "gitlab_token": "your-gitlab-token-here",
        "project": "group/project-name",
        "changelog_file": "CHANGELOG.md",
        "version_file": "pyproject.toml",
        "publish_command": DEFAULT_PUBLISH_COMMAND,
        "webex_token": "your-webex-token-here",
        "webex_room_id": "your-webex-room-id-here",
    }

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(sample_config, f, indent=2)
