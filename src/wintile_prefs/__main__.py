"""Launcher for the Wintile preferences GUI."""

from __future__ import annotations

import argparse
from pathlib import Path

from .config import load_app_config
from .session import PrefsSession
from .summary_table import render_settings_table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wintile-prefs", description="Edit Wintile extension preferences.")
    parser.add_argument("--config", type=Path, default=None, help="YAML file with host/port/settings_path")
    parser.add_argument("--settings", type=Path, default=None, help="Settings file to edit")
    parser.add_argument("--show", action="store_true", help="Print the current settings and exit")
    parser.add_argument(
        "--parity",
        action="store_true",
        help="Keep integer fields write-only instead of following external changes",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_app_config(args.config)
    if args.settings is not None:
        config.settings_path = args.settings

    if args.show:
        session = PrefsSession(config.settings_path)
        render_settings_table(session.init())
        session.disable()
        return 0

    # NiceGUI is only imported when serving
    from .gui.app import run_prefs

    run_prefs(config, parity=args.parity)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
