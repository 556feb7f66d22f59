"""Command-line interface for guidesync.

This package provides the `guidesync` CLI tool: configuration loading,
terminal output, and the commands that run files through the converter.
"""

from .config import ConfigLoader
from .models import ConverterConfig, ExitCode
from .output import OutputHandler

__all__ = [
    'ConfigLoader',
    'ConverterConfig',
    'ExitCode',
    'OutputHandler',
]
