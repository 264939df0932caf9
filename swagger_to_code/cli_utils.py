"""
CLI utilities for command line reconstruction and introspection.
"""

from pathlib import Path

import click

COMMAND_NAME = "swagger_to_code"


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct the command line from the current Click context, for the
    generation comment of the generated files.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    try:
        ctx = click.get_current_context()
    except RuntimeError:
        return COMMAND_NAME

    cli_args = ctx.params
    cmd_parts = [COMMAND_NAME]
    options = []

    for param in click_command.params:
        value = cli_args.get(param.name)
        if value is None or value is False or value == "":
            continue

        # Only file names, output paths depend on the machine
        if isinstance(value, (str, Path)) and Path(str(value)).exists():
            value = Path(str(value)).name

        if isinstance(param, click.Argument):
            cmd_parts.append(str(value))
        elif isinstance(param, click.Option):
            if value == param.default:
                continue
            flag = param.opts[0] if param.opts else f"--{param.name}"
            if param.is_flag:
                options.append(flag)
            else:
                options.extend([flag, str(value)])

    return " ".join(cmd_parts + options)
