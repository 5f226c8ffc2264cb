"""Configuration template generator for Scripta."""

from __future__ import annotations

from pathlib import Path

_TEMPLATE_SECTIONS: list[tuple[str, list[tuple[str, object, str]]]] = [
    (
        "Storage",
        [
            (
                "storage_path",
                "~/.scripta/scripts",
                "Directory holding one JSON record per saved script",
            ),
            ("key_prefix", "scripta-script-", "Storage key prefix for saved scripts"),
            (
                "autosave_delay",
                2.0,
                "Quiet period in seconds before a pending autosave is written",
            ),
        ],
    ),
    (
        "Formatting",
        [
            ("lines_per_page", 55, "Printed lines per screenplay page"),
            ("chars_per_line", 60, "Characters per printed line for page estimates"),
            ("include_title_page", True, "Render a title page in print exports"),
        ],
    ),
    (
        "Logging",
        [
            ("debug", False, "Enable debug mode"),
            (
                "log_level",
                "WARNING",
                "Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
            ),
            ("log_format", "console", "Log output format: console, json, structured"),
        ],
    ),
]


def generate_config_template() -> str:
    """Generate a YAML configuration template with comments.

    Returns:
        A string containing the YAML configuration template.
    """
    lines = [
        "# Scripta Configuration File",
        "# Settings can be overridden by environment variables prefixed with SCRIPTA_",
        "# For example: SCRIPTA_STORAGE_PATH=/path/to/scripts",
    ]
    for section, entries in _TEMPLATE_SECTIONS:
        lines.append("")
        lines.append(f"# {section}")
        for key, value, comment in entries:
            lines.append(f"# {comment} (default: {value})")
            if isinstance(value, bool):
                lines.append(f"{key}: {str(value).lower()}")
            elif isinstance(value, str):
                lines.append(f'{key}: "{value}"')
            else:
                lines.append(f"{key}: {value}")
    lines.append("# log_file: /path/to/scripta.log")
    return "\n".join(lines) + "\n"


def write_config_template(output_path: Path, force: bool = False) -> Path:
    """Write the configuration template to a file.

    Args:
        output_path: Path where the config file should be written.
        force: If True, overwrite existing file.

    Returns:
        The path to the written configuration file.

    Raises:
        FileExistsError: If the file exists and force is False.
    """
    output_path = output_path.resolve()
    if output_path.exists() and not force:
        raise FileExistsError(f"Configuration file already exists: {output_path}")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(generate_config_template(), encoding="utf-8")
    return output_path


def get_default_config_path() -> Path:
    """Get the default configuration file path (~/.config/scripta/config.yaml).

    Falls back to ./scripta.yaml when the home directory is unusable.
    """
    try:
        config_dir = Path.home().resolve() / ".config" / "scripta"
        config_dir.mkdir(parents=True, exist_ok=True)
        return config_dir / "config.yaml"
    except (OSError, RuntimeError):
        return Path.cwd() / "scripta.yaml"
