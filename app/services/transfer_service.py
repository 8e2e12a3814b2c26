"""Экспорт и импорт таблиц в JSON-снимки.

Каталог снимка содержит по одному JSON-массиву на таблицу и ``metadata.json``
вида ``{"exportDate": "...", "tables": {"users": 3, ...}}``. Таблицы
обрабатываются в порядке внешних ключей; при импорте строки с уже
существующим ключом пропускаются (ON CONFLICT DO NOTHING), поэтому
повторный импорт того же снимка ничего не дублирует.
"""
import enum
import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Union

from pydantic.alias_generators import to_camel
from sqlalchemy import DateTime, Table, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from app.database import Base
from app import models  # noqa: F401  регистрирует все таблицы в Base.metadata

logger = logging.getLogger(__name__)

# Порядок важен: родительские таблицы раньше дочерних
TABLE_ORDER = [
    "users",
    "categories",
    "courses",
    "lessons",
    "enrollments",
    "lesson_progress",
    "reviews",
    "certificates",
]

METADATA_FILE = "metadata.json"


class TransferError(Exception):
    pass


def _table(name: str) -> Table:
    return Base.metadata.tables[name]


def _to_json(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, enum.Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _write_json(path: Path, data: Any) -> None:
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2, default=_to_json)


def _read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


# === Экспорт ===
def export_database(db: Session, export_dir: Union[str, Path]) -> Dict[str, int]:
    export_dir = Path(export_dir)
    export_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Starting database export to %s", export_dir)

    counts = {}
    for name in TABLE_ORDER:
        rows = [dict(row) for row in db.execute(select(_table(name))).mappings()]
        _write_json(export_dir / f"{name}.json", rows)
        counts[name] = len(rows)
        logger.info("Exported %s %s", len(rows), name)

    metadata = {"exportDate": datetime.utcnow().isoformat(), "tables": counts}
    _write_json(export_dir / METADATA_FILE, metadata)
    logger.info("Database export completed")
    return counts


# === Импорт ===
def _insert_function(db: Session):
    dialect = db.get_bind().dialect.name
    if dialect == "sqlite":
        return sqlite.insert
    if dialect == "postgresql":
        return postgresql.insert
    raise TransferError(f"Import is not supported for dialect {dialect!r}")


def _column_keys(table: Table) -> Dict[str, str]:
    """Ключ JSON -> колонка: принимаются и snake_case, и camelCase (экспорт drizzle)"""
    keys = {}
    for column in table.c:
        keys[to_camel(column.name)] = column.name
        keys[column.name] = column.name
    return keys


def _parse_datetime(value: str) -> datetime:
    # fromisoformat до Python 3.11 не понимает суффикс Z
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _prepare_row(table: Table, row: Dict[str, Any], keys: Dict[str, str]) -> Dict[str, Any]:
    """Переводит ключи в имена колонок и ISO-строки в datetime; неизвестные ключи отбрасываются"""
    prepared = {}
    for key, value in row.items():
        name = keys.get(key)
        if name is None:
            continue
        if isinstance(value, str) and isinstance(table.c[name].type, DateTime):
            value = _parse_datetime(value)
        prepared[name] = value
    return prepared


def _unknown_keys(rows: List[Dict[str, Any]], keys: Dict[str, str]) -> List[str]:
    unknown = set()
    for row in rows:
        unknown.update(key for key in row if key not in keys)
    return sorted(unknown)


def import_table(db: Session, name: str, rows: List[Dict[str, Any]]) -> int:
    """Вставляет строки, пропуская конфликты; возвращает число новых строк"""
    table = _table(name)
    insert = _insert_function(db)
    keys = _column_keys(table)

    unknown = _unknown_keys(rows, keys)
    if unknown:
        logger.warning("Ignoring unknown %s fields: %s", name, ", ".join(unknown))

    inserted = 0
    for row in rows:
        stmt = insert(table).values(**_prepare_row(table, row, keys)).on_conflict_do_nothing()
        result = db.execute(stmt)
        inserted += max(result.rowcount, 0)
    db.commit()
    return inserted


def read_metadata(export_dir: Union[str, Path]) -> Dict[str, Any]:
    export_dir = Path(export_dir)
    if not export_dir.is_dir():
        raise TransferError(f"Export directory not found: {export_dir}")
    metadata_path = export_dir / METADATA_FILE
    if not metadata_path.is_file():
        raise TransferError("Metadata file not found. Please ensure you have a complete export.")
    return _read_json(metadata_path)


def import_database(db: Session, export_dir: Union[str, Path]) -> Dict[str, int]:
    export_dir = Path(export_dir)
    metadata = read_metadata(export_dir)

    logger.info("Import summary from export dated %s:", metadata.get("exportDate"))
    for table, count in metadata.get("tables", {}).items():
        logger.info("   %s: %s records", table, count)

    inserted = {}
    for name in TABLE_ORDER:
        path = export_dir / f"{name}.json"
        if not path.is_file():
            logger.info("No %s file in export, skipping", path.name)
            continue

        rows = _read_json(path)
        if not isinstance(rows, list):
            raise TransferError(f"{path.name} must contain a JSON array")
        if not rows:
            inserted[name] = 0
            continue

        logger.info("Importing %s...", name)
        # Каждая таблица фиксируется отдельно; уже импортированные не откатываются
        inserted[name] = import_table(db, name, rows)
        logger.info("   Imported %s of %s %s", inserted[name], len(rows), name)

    logger.info("Database import completed")
    return inserted
