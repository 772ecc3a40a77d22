"""Configuration management commands."""

from typing import Annotated, Any

import typer
from pydantic import ValidationError as PydanticValidationError

from todoterm_cli.config import get_config_manager
from todoterm_cli.models import ValidationError
from todoterm_cli.utils.ui.console import get_console
from todoterm_cli.utils.ui.formatters import format_info, format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(help="Configuration management commands")
console = get_console()


def parse_config_value(value: str) -> Any:
    """Turn CLI text into bool/int/None where it looks like one."""
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if lowered in ("none", "null", ""):
        return None
    if value.isdigit():
        return int(value)
    return value


@app.command("view")
@command_wrapper
def view_config(
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format (table/json/yaml)")
    ] = "table",
) -> None:
    """View current configuration."""
    config = get_config_manager().config.model_dump()
    if output == "table":
        # Flatten one level so the table reads "storage.path  value"
        config = {
            f"{section}.{key}": value
            for section, values in config.items()
            for key, value in values.items()
        }
    format_output(config, output)


@app.command("get")
@command_wrapper
def get_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g., output.format)")],
) -> None:
    """Get a configuration value."""
    config_manager = get_config_manager()
    value = config_manager.get(key)
    if value is None and not _is_known_key(key):
        raise ValidationError(f"Configuration key '{key}' not found")
    console.print(value if value is not None else "[dim]unset[/dim]")


@app.command("set")
@command_wrapper
def set_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g., output.format)")],
    value: Annotated[str, typer.Argument(help="Configuration value")],
) -> None:
    """Set a configuration value."""
    parsed_value = parse_config_value(value)
    try:
        get_config_manager().set(key, parsed_value)
    except KeyError:
        raise ValidationError(f"Configuration key '{key}' not found") from None
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid value for '{key}': {value}") from e
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Annotated[str | None, typer.Argument(help="Configuration key to reset")] = None,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            format_info("Cancelled")
            return

    try:
        get_config_manager().reset(key)
    except KeyError:
        raise ValidationError(f"Configuration key '{key}' not found") from None

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")


@app.command("path")
@command_wrapper
def config_path() -> None:
    """Show where the configuration and data files live."""
    from todoterm_cli.services.todo_service import resolve_data_file

    config_manager = get_config_manager()
    console.print(f"[cyan]Config:[/cyan] {config_manager.config_file}")
    console.print(f"[cyan]Data:[/cyan]   {resolve_data_file()}")


def _is_known_key(key: str) -> bool:
    section, _, name = key.partition(".")
    values = get_config_manager().config.model_dump()
    return isinstance(values.get(section), dict) and name in values[section]
