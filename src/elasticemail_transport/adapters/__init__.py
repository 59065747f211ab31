"""Adapters layer - infrastructure and framework integrations.

Contents:
    * :mod:`.elasticemail` - Transport, HTTP client, wire format, and settings
    * :mod:`.config` - Configuration loading, display, and ``--set`` overrides
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.memory` - In-memory adapters for tests
    * :mod:`.cli` - rich-click CLI
"""

from __future__ import annotations

__all__: list[str] = []
