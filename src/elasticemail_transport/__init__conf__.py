"""Static package metadata surfaced to CLI commands and documentation.

Keep ``version`` in step with ``[project].version`` in ``pyproject.toml``;
``tests/test_metadata_sync.py`` fails when the two drift.
"""

from __future__ import annotations

name = "elasticemail_transport"
title = "Send email.message.EmailMessage objects through the Elastic Email transactional API"
version = "0.1.0"
homepage = "https://github.com/elasticemail-transport/elasticemail_transport"
author = "elasticemail_transport maintainers"
author_email = "maintainers@elasticemail-transport.invalid"
shell_command = "elasticemail-transport"

# Identifiers for lib_layered_config path resolution
LAYEREDCONF_VENDOR = "elasticemail-transport"
LAYEREDCONF_APP = "Elastic Email Transport"
LAYEREDCONF_SLUG = "elasticemail-transport"


def print_info() -> None:
    """Print the summarised metadata block used by the CLI ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for elasticemail_transport:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))
