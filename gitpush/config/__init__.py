# gitpush Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from gitpush.config.defaults import DEFAULT_CONFIG, generate_default_config
from gitpush.config.loader import (
    ensure_config_exists,
    get_config_path,
    load_config,
    load_config_or_default,
    validate_config_file,
)
from gitpush.config.schema import (
    CredentialsConfig,
    GitpushConfig,
    OutputConfig,
    PushConfig,
    RepositoryConfig,
)

__all__ = [
    # Schema
    "GitpushConfig",
    "RepositoryConfig",
    "PushConfig",
    "CredentialsConfig",
    "OutputConfig",
    # Loader
    "load_config",
    "load_config_or_default",
    "get_config_path",
    "ensure_config_exists",
    "validate_config_file",
    # Defaults
    "DEFAULT_CONFIG",
    "generate_default_config",
]
