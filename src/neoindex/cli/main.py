from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from neoindex.settings import settings


def _configure_logging() -> None:
    import logging

    level = (settings.log_level or "INFO").upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _index_dict(idx) -> dict[str, Any]:
    return {
        "name": idx.name,
        "kind": idx.kind.value,
        "self": idx.self_uri,
        "template": idx.uri_template,
        "provider": idx.provider,
        "type": idx.index_type,
        "case_sensitive": idx.case_sensitive,
    }


def _results_dict(found) -> dict[str, Any]:
    return {str(k): v.model_dump(by_alias=True, mode="json") for k, v in found.items()}


def _emit(obj: Any) -> None:
    print(json.dumps(obj, indent=2, sort_keys=True))


def _database(args: argparse.Namespace):
    from neoindex.http import GraphDatabase

    db = GraphDatabase(args.url)
    try:
        return db.connect()
    except Exception:
        db.close()
        raise


def cmd_version() -> int:
    from neoindex import __version__

    print(__version__)
    return 0


def cmd_index_create(args: argparse.Namespace) -> int:
    from neoindex.models import EntityKind
    from neoindex.registry import IndexRegistry

    with _database(args) as db:
        idx = IndexRegistry(db).create(args.name, args.type, args.provider, kind=EntityKind(args.kind))
    _emit(_index_dict(idx))
    return 0


def cmd_index_list(args: argparse.Namespace) -> int:
    from neoindex.models import EntityKind
    from neoindex.registry import IndexRegistry

    with _database(args) as db:
        found = IndexRegistry(db).list(EntityKind(args.kind))
    _emit([_index_dict(i) for i in found])
    return 0


def cmd_index_get(args: argparse.Namespace) -> int:
    from neoindex.models import EntityKind
    from neoindex.registry import IndexRegistry

    with _database(args) as db:
        idx = IndexRegistry(db).get(args.name, EntityKind(args.kind))
    _emit(_index_dict(idx))
    return 0


def cmd_index_delete(args: argparse.Namespace) -> int:
    from neoindex.models import EntityKind
    from neoindex.registry import IndexRegistry

    with _database(args) as db:
        registry = IndexRegistry(db)
        registry.delete(registry.get(args.name, EntityKind(args.kind)))
    return 0


def cmd_entry_add(args: argparse.Namespace) -> int:
    from neoindex.entries import EntryManager
    from neoindex.models import EntityKind, EntityRef
    from neoindex.registry import IndexRegistry

    with _database(args) as db:
        idx = IndexRegistry(db).get(args.index, EntityKind(args.kind))
        EntryManager(db).add(idx, EntityRef.from_uri(args.entity), args.key, args.value)
    return 0


def cmd_entry_remove(args: argparse.Namespace) -> int:
    from neoindex.entries import EntryManager
    from neoindex.models import EntityKind, EntityRef
    from neoindex.registry import IndexRegistry

    with _database(args) as db:
        idx = IndexRegistry(db).get(args.index, EntityKind(args.kind))
        EntryManager(db).remove(idx, EntityRef.from_uri(args.entity), args.key, args.value)
    return 0


def cmd_find(args: argparse.Namespace) -> int:
    from neoindex.lookup import LookupEngine
    from neoindex.models import EntityKind
    from neoindex.registry import IndexRegistry

    with _database(args) as db:
        idx = IndexRegistry(db).get(args.index, EntityKind(args.kind))
        found = LookupEngine(db).find(idx, args.key, args.value)
    _emit(_results_dict(found))
    return 0


def cmd_query(args: argparse.Namespace) -> int:
    from neoindex.lookup import LookupEngine
    from neoindex.models import EntityKind
    from neoindex.registry import IndexRegistry

    with _database(args) as db:
        idx = IndexRegistry(db).get(args.index, EntityKind(args.kind))
        found = LookupEngine(db).query(idx, args.query)
    _emit(_results_dict(found))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="neoindex")
    p.add_argument("--url", default=None, help="REST data root (default: NEOINDEX_URL)")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("version").set_defaults(func=lambda _a: cmd_version())

    def with_kind(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
        parser.add_argument("--kind", choices=["node", "relationship"], default="node")
        return parser

    idx = sub.add_parser("index")
    idx_sub = idx.add_subparsers(dest="index_cmd", required=True)

    create = with_kind(idx_sub.add_parser("create", help="Create an index"))
    create.add_argument("name")
    create.add_argument("--type", default="", help="e.g. exact|fulltext")
    create.add_argument("--provider", default="", help="e.g. lucene")
    create.set_defaults(func=cmd_index_create)

    with_kind(idx_sub.add_parser("list", help="List indexes")).set_defaults(func=cmd_index_list)

    get = with_kind(idx_sub.add_parser("get", help="Show one index"))
    get.add_argument("name")
    get.set_defaults(func=cmd_index_get)

    delete = with_kind(idx_sub.add_parser("delete", help="Delete an index"))
    delete.add_argument("name")
    delete.set_defaults(func=cmd_index_delete)

    entry = sub.add_parser("entry")
    entry_sub = entry.add_subparsers(dest="entry_cmd", required=True)

    add = with_kind(entry_sub.add_parser("add", help="Index an entity under key=value"))
    add.add_argument("index")
    add.add_argument("entity", help="Self link of the node or relationship")
    add.add_argument("key")
    add.add_argument("value")
    add.set_defaults(func=cmd_entry_add)

    remove = with_kind(entry_sub.add_parser("remove", help="Remove an entity's entries"))
    remove.add_argument("index")
    remove.add_argument("entity", help="Self link of the node or relationship")
    remove.add_argument("--key", default="")
    remove.add_argument("--value", default="")
    remove.set_defaults(func=cmd_entry_remove)

    find = with_kind(sub.add_parser("find", help="Exact key/value lookup"))
    find.add_argument("index")
    find.add_argument("key")
    find.add_argument("value")
    find.set_defaults(func=cmd_find)

    query = with_kind(sub.add_parser("query", help="Query-language lookup"))
    query.add_argument("index")
    query.add_argument("query")
    query.set_defaults(func=cmd_query)

    return p


def main(argv: list[str] | None = None) -> int:
    from neoindex.errors import NeoIndexError

    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging()
    try:
        return args.func(args)
    except (NeoIndexError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


def app() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    app()
