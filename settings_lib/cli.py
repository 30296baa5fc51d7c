"""Command line helper for settings files.

Prints a configuration template, or dumps / replaces the content of the
configured settings file. Only file-backed configurations are useful here
since a memory store does not outlive the process.
"""
from __future__ import annotations
import argparse
import sys
from pathlib import Path
from typing import Iterable, Optional
import yaml

from settings_lib.config.config import SettingsFileConfig, load_config
from settings_lib.file import SettingsFileError, check, create_settings_file, iter_lines, reading, writing
from settings_lib.logging_config import configure_logging


def get_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="settings-file", description="Inspect or replace a settings file")
    p.add_argument("--config", type=Path, default=None, help="YAML settings config to use")
    p.add_argument("--print-template", action="store_true", help="Print the default YAML config template to stdout and exit")
    sub = p.add_subparsers(dest="command")
    sub.add_parser("cat", help="Print the settings file content")
    put = sub.add_parser("put", help="Replace the settings file content with stdin")
    put.add_argument("--force", action="store_true", help="Use force_close instead of close")
    return p


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = get_parser()
    if argv is not None:
        argv = list(argv)
    return parser.parse_args(argv)


def template() -> str:
    return yaml.safe_dump(SettingsFileConfig().model_dump(), sort_keys=False)


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    if args.print_template:
        sys.stdout.write(template())
        return 0
    if args.command is None:
        get_parser().print_help()
        return 2

    logger = configure_logging(args.config)
    cfg = load_config(args.config)
    accessor = create_settings_file(cfg)
    try:
        if args.command == "cat":
            with reading(accessor):
                for line in iter_lines(accessor):
                    sys.stdout.buffer.write(line)
        elif args.command == "put":
            data = sys.stdin.buffer.read()
            if args.force:
                with accessor:
                    check(accessor.open_for_write(), "open_for_write")
                    check(accessor.write(data), "write")
            else:
                with writing(accessor) as f:
                    check(f.write(data), "write")
    except SettingsFileError as e:
        logger.error("%s failed for %s: %s", args.command, accessor.identity, e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
