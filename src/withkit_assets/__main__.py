from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

from withkit_assets.application.app import PLAN_CONTEXTS, BuildApp


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="withkit-assets",
        description="Build and inspect the assets of a block child theme.",
    )
    _ = parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="settings file (default: configs/settings.ini, or SETTINGS_FILE)",
    )
    commands = parser.add_subparsers(dest="command", required=True)
    _ = commands.add_parser("build", help="run one build in the configured mode")
    _ = commands.add_parser("watch", help="rebuild on changes; no live-reload server")
    plan = commands.add_parser("plan", help="print the registrations of one request")
    _ = plan.add_argument("--context", choices=PLAN_CONTEXTS, default="frontend")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    app = BuildApp.from_env(args.settings)
    if args.command == "build":
        return app.build()
    if args.command == "watch":
        return app.watch()
    return app.plan(args.context)


if __name__ == "__main__":
    raise SystemExit(main())
