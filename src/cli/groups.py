"""Shared help-panel groups for the blockwright CLI."""

from __future__ import annotations

from cyclopts import Group

session_group = Group(
    "Session",
    help="Session and configuration options.",
    sort_key=0,
)

output_group = Group(
    "Output",
    help="Where generated code and rewritten documents go.",
    sort_key=1,
)

generation_group = Group(
    "Generation",
    help="Override configured code-generation settings.",
    sort_key=2,
)

__all__ = ["generation_group", "output_group", "session_group"]
