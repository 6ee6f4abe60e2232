"""
Local copy of stack outputs.

Writes resolved stack outputs to a dotenv-style file so local tooling can
pick up endpoints without calling ``pulumi stack output``.
"""

from pathlib import Path
from typing import Any, Mapping

import pulumi


def format_env_lines(values: Mapping[str, Any]) -> str:
    """
    Render resolved values as KEY=value lines, sorted by key.

    None values are written as empty strings; lists are comma joined.
    """
    lines = []
    for key in sorted(values):
        value = values[key]
        if value is None:
            value = ""
        elif isinstance(value, (list, tuple)):
            value = ",".join(str(v) for v in value)
        lines.append(f"{key.upper()}={value}")
    return "\n".join(lines) + "\n"


def write_outputs_to_env(
    outputs: Mapping[str, pulumi.Input[Any]],
    path: str,
) -> pulumi.Output[None] | None:
    """
    Write stack outputs to a dotenv file once they resolve.

    Only pass non-secret values; the file is plaintext. Nothing is written
    during preview, where most values are still unknown.

    Args:
        outputs: Export name to value (plain or Output)
        path: Target file path

    Returns:
        The pending write, or None during preview
    """
    if pulumi.runtime.is_dry_run():
        return None

    def _write(resolved: dict[str, Any]) -> None:
        Path(path).write_text(format_env_lines(resolved))
        pulumi.log.info(f"Wrote {len(resolved)} stack outputs to {path}")

    return pulumi.Output.all(**outputs).apply(_write)
