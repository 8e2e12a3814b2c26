"""
Импорт/экспорт базы данных в JSON-снимки

Usage:
    course-db export [--dir DIR]
    course-db import [--dir DIR]

Environment:
    DATABASE_URL    строка подключения (по умолчанию из настроек)
    EXPORT_DIR      каталог снимка
"""
import argparse
import logging
import sys
from typing import List, Optional

from sqlalchemy.orm import sessionmaker

from app.config import settings
from app.core.logging import setup_logging
from app.database import Base, make_engine
from app.services.transfer_service import export_database, import_database

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="course-db",
        description="Import or export the course database as JSON snapshots",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s export --dir ./db/exports
  %(prog)s import --dir ./db/exports
        """
    )
    parser.add_argument(
        "--database-url",
        default=settings.DATABASE_URL,
        help="Database URL (default: from settings)"
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    for name, help_text in (("export", "Export all tables"), ("import", "Import all tables")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "--dir",
            default=settings.EXPORT_DIR,
            help=f"Snapshot directory (default: {settings.EXPORT_DIR})"
        )
    return parser


def run(args: argparse.Namespace) -> int:
    engine = make_engine(args.database_url)
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autoflush=False)()
    try:
        if args.command == "export":
            counts = export_database(session, args.dir)
        else:
            logger.warning("This will insert data into %s", args.database_url)
            counts = import_database(session, args.dir)
    finally:
        session.close()
        engine.dispose()

    for table, count in counts.items():
        logger.info("%s: %s", table, count)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if not args.command:
        parser.print_help()
        return 1

    try:
        return run(args)
    except Exception:
        logger.exception("Error during %s", args.command)
        return 1


if __name__ == "__main__":
    sys.exit(main())
