# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""``python -m envwriter`` runs the same CLI as the ``envwriter`` script."""

from __future__ import annotations

from envwriter.cli import cli


def main() -> None:
    cli(prog_name="envwriter")


if __name__ == "__main__":
    main()
