# gitpush Configuration Loader
# Load, save, and validate YAML configuration files

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from gitpush.config.defaults import default_config_dict, generate_default_config
from gitpush.config.schema import GitpushConfig


def get_config_dir() -> Path:
    """Get the gitpush configuration directory."""
    return Path.home() / ".config" / "gitpush"


def get_config_path() -> Path:
    """Get the path to the configuration file."""
    # Allow override via environment variable
    env_path = os.environ.get("GITPUSH_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return get_config_dir() / "config.yaml"


def load_config(config_path: Optional[Path] = None) -> GitpushConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        GitpushConfig: Validated configuration object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValidationError: If config file is invalid.
        ValueError: If the file or one of its sections is not a mapping.
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\nRun 'gitpush config init' to create one."
        )

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ValueError(f"Configuration must be a mapping: {config_path}")

    merged = _merge_with_defaults(data)

    return GitpushConfig.model_validate(merged)


def load_config_or_default(config_path: Optional[Path] = None) -> GitpushConfig:
    """
    Load configuration, falling back to defaults when no file exists.

    An explicitly given path must exist.
    """
    if config_path is None and not get_config_path().exists():
        return GitpushConfig.model_validate(default_config_dict())
    return load_config(config_path)


def ensure_config_exists(config_path: Optional[Path] = None) -> tuple[Path, bool]:
    """
    Ensure configuration file exists, creating default if needed.

    Returns:
        Tuple of (config_path, was_created).
    """
    if config_path is None:
        config_path = get_config_path()

    if config_path.exists():
        return config_path, False

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(generate_default_config(), encoding="utf-8")
    return config_path, True


def validate_config_file(config_path: Optional[Path] = None) -> tuple[bool, list[str]]:
    """
    Validate a configuration file without applying defaults.

    Args:
        config_path: Path to config file to validate.

    Returns:
        Tuple of (is_valid, error_messages).
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return False, [f"Configuration file not found: {config_path}"]

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return False, [f"Invalid YAML syntax: {e}"]

    if data is None:
        return False, ["Configuration file is empty"]

    if not isinstance(data, dict):
        return False, ["Configuration must be a mapping"]

    errors: list[str] = []

    try:
        config = GitpushConfig.model_validate(data)
    except ValidationError as e:
        for error in e.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")
        return False, errors

    creds = config.push.credentials
    if bool(creds.username) != bool(creds.password):
        errors.append("push -> credentials: username and password must be set together")

    return len(errors) == 0, errors


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    """Return a configuration section, which must be a mapping if present."""
    value = data.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"Configuration section '{name}' must be a mapping")
    return value


def _merge_with_defaults(data: dict[str, Any]) -> dict[str, Any]:
    """Merge loaded data with default values for missing keys."""
    result = default_config_dict()

    repository = _section(data, "repository")
    result["repository"] = {**result["repository"], **repository}

    push = _section(data, "push")
    credentials = {**result["push"]["credentials"], **_section(push, "credentials")}
    result["push"] = {**result["push"], **push, "credentials": credentials}

    output = _section(data, "output")
    result["output"] = {**result["output"], **output}

    return result
