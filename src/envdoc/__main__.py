# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``python -m envdoc`` runs the same click group as the ``envdoc`` script."""

from __future__ import annotations

from envdoc.cli import cli


def main() -> None:
    cli(prog_name="envdoc")


if __name__ == "__main__":
    main()
