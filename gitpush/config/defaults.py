# gitpush Default Configuration
# Default configuration as Python dict and YAML generator

import copy
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "repository": {
        "path": ".",
        "timeout": None,
    },
    "push": {
        "remote": "origin",
        "push_tags": False,
        "push_all": False,
        "force": False,
        "credentials": {
            "username": None,
            "password": None,
        },
    },
    "output": {
        "verbose": False,
        "colored": True,
    },
}


def default_config_dict() -> dict[str, Any]:
    """Return a deep copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def generate_default_config() -> str:
    """
    Generate the default configuration file content with comments.

    Returns:
        YAML string.
    """
    header = """\
# gitpush configuration
# CLI options override every value below.
#
# repository.path     Repository to push from (~ is expanded)
# repository.timeout  Seconds before a push is abandoned (null = no limit)
# push.remote         Destination remote name
# push.push_tags      Include all tags in the push
# push.push_all       Push all local branches instead of the current one
# push.force          Allow non-fast-forward updates
# push.credentials    Username and password, both required to be used.
#                     Prefer the GITPUSH_USERNAME / GITPUSH_PASSWORD
#                     environment variables over storing a password here.

"""
    body = yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return header + body
