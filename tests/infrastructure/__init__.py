"""
Shared test infrastructure for the slot generator.

Modules:
- file_utils: creating files and config directories
- cli_utils: running the CLI in-process and parsing its JSON output
"""

from .file_utils import write, write_yaml_config
from .cli_utils import run_cli, jload, CliResult

__all__ = [
    "write",
    "write_yaml_config",
    "run_cli",
    "jload",
    "CliResult",
]
