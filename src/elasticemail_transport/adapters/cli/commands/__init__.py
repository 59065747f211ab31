"""CLI command implementations registered on the root group.

Contents:
    * Info command from :mod:`.info`
    * Config command from :mod:`.config`
    * Send commands from :mod:`.send` (subpackage)
"""

from __future__ import annotations

from .config import cli_config
from .info import cli_info
from .send import cli_send_email, cli_send_eml

__all__ = [
    "cli_config",
    "cli_info",
    "cli_send_email",
    "cli_send_eml",
]
