"""
Command-line interface for the TV catalog.

Provides commands for:
- serve: Run the HTTP API
- init: Create missing tables
- status: Show row counts per table
- reset-database: Drop and recreate every table
- dump / import: Export and import full snapshots
- seed / unseed / list-seeds: Manage bundled datasets through the API
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from .client import CatalogClient, CatalogClientError
from .config import Config
from .database import DatabaseManager
from .errors import CatalogError
from .seeding import Seeder
from .snapshot import SnapshotManager
from .utils import confirm_action, format_number, print_header, print_status_table


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with all commands."""
    parser = argparse.ArgumentParser(
        prog="tvcatalog",
        description="TV Catalog - Serve, seed and maintain the show catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create tables (run first)
  python -m tvcatalog init

  # Start the API on PORT (default 3000)
  python -m tvcatalog serve

  # Seed a show through the running API
  python -m tvcatalog seed farscape

  # Back up and restore
  python -m tvcatalog dump -o backup.json
  python -m tvcatalog import backup.json
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", help="Bind address (default: API_HOST)")
    serve_parser.add_argument("--port", type=int, help="Port (default: PORT)")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    subparsers.add_parser("init", help="Create missing tables")
    subparsers.add_parser("status", help="Show current database status")

    reset_parser = subparsers.add_parser(
        "reset-database",
        help="Drop and recreate all tables (DANGEROUS - deletes all data)",
    )
    reset_parser.add_argument("--force", action="store_true", help="Skip confirmation prompt")

    dump_parser = subparsers.add_parser("dump", help="Export the whole catalog as JSON")
    dump_parser.add_argument("-o", "--output", metavar="FILE", help="Write to FILE instead of stdout")

    import_parser = subparsers.add_parser("import", help="Import a snapshot file")
    import_parser.add_argument("file", help="Snapshot JSON file, or - for stdin")

    seed_parser = subparsers.add_parser("seed", help="Seed a bundled show through the API")
    seed_parser.add_argument("name", help="Seed name, or 'all'")

    unseed_parser = subparsers.add_parser("unseed", help="Remove a seeded show and its orphaned actors")
    unseed_parser.add_argument("name", help="Seed name")

    subparsers.add_parser("list-seeds", help="List bundled seeds")

    return parser


def cmd_serve(config: Config, args) -> int:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=args.host or config.api_host,
        port=args.port or config.api_port,
        reload=args.reload or config.api_debug,
    )
    return 0


def cmd_init(db: DatabaseManager) -> int:
    """Run init command."""
    print_header("Database Init")

    result = db.init_schema()
    for table in DatabaseManager.TABLES:
        if table in result["created"]:
            print(f"  {table:<20} CREATED")
        else:
            print(f"  {table:<20} EXISTS")

    print(f"\nInit complete! {len(result['created'])} tables created, "
          f"{len(result['existing'])} already existed.")
    return 0


def cmd_status(db: DatabaseManager) -> int:
    """Run status command."""
    print_header("TV Catalog Status")

    status = db.get_status()
    rows = {
        table: format_number(count) if count is not None else "MISSING"
        for table, count in status["counts"].items()
    }
    rows["All tables exist"] = "Yes" if status["all_tables_exist"] else "No"
    print_status_table(rows, title="Database Status")

    if status["missing_tables"]:
        print(f"Missing tables: {', '.join(status['missing_tables'])}")
        print("\nRun 'python -m tvcatalog init' to create missing tables.")

    return 0


def cmd_reset(db: DatabaseManager, args) -> int:
    """Run reset-database command."""
    print_header("Reset Database")

    print("\nThe following tables will be DROPPED and recreated (all data deleted):")
    for table in DatabaseManager.TABLES:
        print(f"  - {table}")

    if not args.force:
        print("\nThis action CANNOT be undone!")
        if not confirm_action("Reset the database?", expected="RESET"):
            print("Cancelled.")
            return 0

    result = db.reset_database()
    print(f"\nDropped {len(result['dropped'])} tables, created {len(result['created'])}.")
    return 0


def cmd_dump(db: DatabaseManager, args) -> int:
    """Run dump command."""
    snapshot = SnapshotManager(db).export_all()
    content = json.dumps(snapshot, indent=2, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(content + "\n", encoding="utf-8")
        counts = ", ".join(f"{k}={len(v)}" for k, v in snapshot.items() if isinstance(v, list))
        print(f"Wrote {args.output} ({counts})")
    else:
        print(content)
    return 0


def cmd_import(db: DatabaseManager, args) -> int:
    """Run import command."""
    if args.file == "-":
        raw = sys.stdin.read()
    else:
        raw = Path(args.file).read_text(encoding="utf-8")

    try:
        snapshot = json.loads(raw)
    except json.JSONDecodeError as e:
        print(f"Invalid JSON in {args.file}: {e}")
        return 1

    print_header("Import Snapshot")
    report = SnapshotManager(db).import_all(snapshot)

    print_status_table(
        {
            section: f"{c['created']} created, {c['updated']} updated, "
                     f"{c['unchanged']} unchanged, {c['failed']} failed"
            for section, c in report.counts.items()
        },
        title=f"Import {report.status}",
    )
    for failure in report.failures[:20]:
        print(f"  {failure['entity']}[{failure['index']}] {failure['error']}: {failure['message']}")
    if len(report.failures) > 20:
        print(f"  ... and {len(report.failures) - 20} more failures")

    return 0 if not report.failures else 2


def cmd_seed(seeder: Seeder, args) -> int:
    """Run seed command."""
    names = seeder.list_seeds() if args.name == "all" else [args.name]
    exit_code = 0
    for name in names:
        result = seeder.seed(name)
        created = sum(c.get("created", 0) for c in result["counts"].values())
        print(f"{result['show']}: {result['status']} ({format_number(created)} records created, "
              f"{len(result['failures'])} failures)")
        if result["failures"]:
            exit_code = 2
    return exit_code


def cmd_unseed(seeder: Seeder, args) -> int:
    """Run unseed command."""
    result = seeder.unseed(args.name)
    if result["show_id"] is None:
        print(f"Nothing to remove for {args.name}")
        return 0
    print(f"Removed show {result['show_id']}")
    for actor in result["deleted_actors"]:
        print(f"  Deleted actor: {actor}")
    return 0


def cmd_list_seeds() -> int:
    """Run list-seeds command."""
    for name in Seeder.list_seeds():
        print(name)
    return 0


def main(args: Optional[list] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 0

    if parsed_args.command == "list-seeds":
        return cmd_list_seeds()

    # Load configuration
    try:
        config = Config.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}")
        print("\nMake sure your .env file contains either:")
        print("  DATABASE_URL=<sqlalchemy url>")
        print("or:")
        print("  DB_HOST, DB_PORT, DB_USER, DB_PASSWORD, DB_NAME")
        return 1

    try:
        if parsed_args.command == "serve":
            return cmd_serve(config, parsed_args)
        elif parsed_args.command in ("seed", "unseed"):
            seeder = Seeder(CatalogClient(config), config)
            if parsed_args.command == "seed":
                return cmd_seed(seeder, parsed_args)
            return cmd_unseed(seeder, parsed_args)

        db = DatabaseManager(config)
        if parsed_args.command == "init":
            return cmd_init(db)
        elif parsed_args.command == "status":
            return cmd_status(db)
        elif parsed_args.command == "reset-database":
            return cmd_reset(db, parsed_args)
        elif parsed_args.command == "dump":
            return cmd_dump(db, parsed_args)
        elif parsed_args.command == "import":
            return cmd_import(db, parsed_args)
        else:
            parser.print_help()
            return 0

    except KeyboardInterrupt:
        print("\n\nOperation cancelled.")
        return 130
    except (CatalogError, CatalogClientError, ValueError, OSError) as e:
        print(f"\nError: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
