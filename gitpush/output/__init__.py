# gitpush Output Module
# Rich console output

from gitpush.output.console import Console, create_console

__all__ = [
    "Console",
    "create_console",
]
