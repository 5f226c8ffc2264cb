"""CLI command modules for Scripta."""

from scripta.cli.commands.analyze import (
    characters_command,
    check_command,
    stats_command,
)
from scripta.cli.commands.element import (
    add_command,
    cycle_command,
    delete_command,
    edit_command,
    set_type_command,
)
from scripta.cli.commands.scene import reorder_command, scenes_command
from scripta.cli.commands.script import (
    list_command,
    meta_command,
    new_command,
    remove_command,
    show_command,
)

__all__ = [
    "add_command",
    "characters_command",
    "check_command",
    "cycle_command",
    "delete_command",
    "edit_command",
    "list_command",
    "meta_command",
    "new_command",
    "remove_command",
    "reorder_command",
    "scenes_command",
    "set_type_command",
    "show_command",
    "stats_command",
]
