"""CLI command modules for mockito-agent."""

from .compare import compare_versions_command
from .config_cmd import config
from .prepare import prepare

__all__ = ["compare_versions_command", "config", "prepare"]
