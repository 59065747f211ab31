"""Send commands.

Contents:
    * :func:`.send_email.cli_send_email` - Compose a message from options and send it.
    * :func:`.send_eml.cli_send_eml` - Send a stored ``.eml`` file.
"""

from __future__ import annotations

from .send_email import build_message, cli_send_email
from .send_eml import cli_send_eml, read_eml

__all__ = ["build_message", "cli_send_email", "cli_send_eml", "read_eml"]
