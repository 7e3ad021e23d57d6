# SPDX-FileCopyrightText: 2025 CoreWeave, Inc.
# SPDX-License-Identifier: Apache-2.0
# SPDX-PackageName: tavor-client

"""Entry point for `python -m tavor` and `tavor` console script."""

from __future__ import annotations

import sys


def main() -> None:
    """Run the Tavor CLI."""
    try:
        from tavor.cli import cli
    except ImportError as e:
        if getattr(e, "name", None) in ("tavor.cli", "click"):
            print(
                "tavor CLI requires the 'cli' extra.\n"
                "Install it with:  pip install tavor-client[cli]",
                file=sys.stderr,
            )
            sys.exit(1)
        raise
    cli()


if __name__ == "__main__":
    main()
