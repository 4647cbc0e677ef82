"""
Read and write stored values from the command line.

Usage:
  localstore init-db
  localstore get theme --default '"light"'
  localstore set theme '"dark"'
  localstore exists theme
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Optional, Sequence

from localstore.core.config import configure_logging
from localstore.db.create_tables import create_all
from localstore.repositories.sql_context import open_context
from localstore.services.store import exists, get_value, write_value


def _parse_json(text: str, what: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        raise SystemExit(f"{what} must be valid JSON: {text!r}")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="localstore", description="Local key/value data store")
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create the record table")

    get_p = sub.add_parser("get", help="Print a value (created with the default if missing)")
    get_p.add_argument("key")
    get_p.add_argument("--default", default="null", help="JSON default (default: null)")

    set_p = sub.add_parser("set", help="Write a JSON value")
    set_p.add_argument("key")
    set_p.add_argument("value", help="JSON value")

    exists_p = sub.add_parser("exists", help="Print whether a key is stored")
    exists_p.add_argument("key")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging()

    if args.command == "init-db":
        create_all()
        print("OK: tables created")
        return

    key = (args.key or "").strip()
    if not key:
        raise SystemExit("Invalid key")

    with open_context() as context:
        if args.command == "get":
            default = _parse_json(args.default, "--default")
            value = get_value(context, key, default, as_type=Any)
            context.save()
            print(json.dumps(value, ensure_ascii=False))
        elif args.command == "set":
            write_value(context, key, _parse_json(args.value, "value"))
            print(f"OK: {key} written")
        elif args.command == "exists":
            print(json.dumps(exists(context, key)))


def run() -> None:
    try:
        main()
    except Exception as exc:
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)


if __name__ == "__main__":
    run()
