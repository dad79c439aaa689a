"""Shared utilities for blockwright."""

from utils.env_utils import env_enum, env_int, env_text, env_value
from utils.file_io import read_text, read_toml, write_text
from utils.registry_protocol import MutableRegistry

__all__ = [
    "MutableRegistry",
    "env_enum",
    "env_int",
    "env_text",
    "env_value",
    "read_text",
    "read_toml",
    "write_text",
]
