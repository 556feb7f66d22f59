"""Data models for CLI operations.

All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): All inputs converted
    - GENERAL_ERROR (1): Configuration or file access failure
    - CONVERSION_ERROR (2): An input could not be converted

    Example:
        >>> raise typer.Exit(ExitCode.SUCCESS)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    CONVERSION_ERROR = 2


@dataclass
class ConverterConfig:
    """Settings read from ~/.config/guidesync/config.yaml.

    Attributes:
        enable_link_target_blank: Open external links in a new tab when
            rendering Markdown to HTML
        contents_dir: Directory that relative input paths resolve against

    Example:
        >>> config = ConverterConfig(enable_link_target_blank=True)
        >>> config = ConverterConfig()  # Defaults
    """
    enable_link_target_blank: bool = False
    contents_dir: str = "."
