import argparse
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pandas as pd
from sqlalchemy import Integer, func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session, sessionmaker

from airport_api.errors import ReferenceBatchError, ReferenceSheetMissingError
from airport_api.models import Airport, City, Country
from airport_api.services.coercion import coerce_row

logger = logging.getLogger(__name__)

AIRPORTS_SHEET = "airports"
CITIES_SHEET = "cities"
COUNTRIES_SHEET = "countries"

# Dependency order: cities point at countries, airports point at both
IMPORT_ORDER = (
    (COUNTRIES_SHEET, Country, "Countries imported"),
    (CITIES_SHEET, City, "Cities imported"),
    (AIRPORTS_SHEET, Airport, "Airports imported"),
)

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


@dataclass
class ImportSummary:
    upserted: Dict[str, int] = field(default_factory=dict)
    skipped: Dict[str, int] = field(default_factory=dict)


def read_workbook(workbook_path: str) -> Dict[str, List[Dict[str, Any]]]:
    """
    Read the three reference sheets into lists of {header: raw cell} rows.
    Raises ReferenceSheetMissingError when any required sheet is absent.
    """
    # Only blank cells are missing; text such as "NA" or "None" is data
    frames = pd.read_excel(
        workbook_path,
        sheet_name=None,
        dtype=object,
        keep_default_na=False,
        na_values=[""]
    )

    missing = [name for name, _, _ in IMPORT_ORDER if name not in frames]
    if missing:
        raise ReferenceSheetMissingError(missing)

    sheets = {}
    for name, _, _ in IMPORT_ORDER:
        frame = frames[name].astype(object)
        frame = frame.where(pd.notna(frame), None)
        sheets[name] = frame.to_dict(orient="records")
    return sheets


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _storable(value: Any, integer_column: bool = False) -> Any:
    # NaN / NaT sentinels from coercion cannot be persisted; they land as NULL
    if value is pd.NaT:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    # Fractional values bound for integer columns round half away from zero on every backend
    if integer_column and isinstance(value, float) and not math.isinf(value):
        return _round_half_away(value)
    return value


class ReferenceImporter:
    """
    One-shot loader for countries, cities and airports.

    The import only runs against an empty store (no countries yet). Each sheet is
    coerced and upserted by business id, one transaction per sheet, in dependency order.
    """

    def __init__(self, session_factory: sessionmaker, workbook_path: str, chunk_size: int = 500):
        self.session_factory = session_factory
        self.workbook_path = workbook_path
        self.chunk_size = max(1, chunk_size)

    def run(self, force: bool = False) -> Optional[ImportSummary]:
        """
        Import the workbook. Returns None when skipped or when a failure was swallowed.
        A missing sheet is the only failure that propagates.
        """
        try:
            if not force and self._has_countries():
                logger.info("Data already exists, skipping import")
                return None

            logger.info(f"Importing data from {self.workbook_path}...")
            sheets = read_workbook(self.workbook_path)

            summary = ImportSummary()
            for sheet_name, model, milestone in IMPORT_ORDER:
                upserted, skipped = self._import_sheet(sheet_name, model, sheets[sheet_name])
                summary.upserted[sheet_name] = upserted
                summary.skipped[sheet_name] = skipped
                logger.info(f"{milestone} ({upserted} upserted, {skipped} skipped)")

            logger.info("Data imported successfully")
            return summary

        except ReferenceSheetMissingError as e:
            logger.critical(f"Error: {e}")
            raise
        except Exception as e:
            logger.error(f"Data Import Error: {e}")
            return None

    def _has_countries(self) -> bool:
        with self.session_factory() as db:
            count = db.query(func.count(Country.id)).scalar() or 0
        return count > 0

    def _prepare_records(self, sheet_name: str, model, rows: List[Dict[str, Any]]):
        columns = set(model.__table__.columns.keys())
        integer_columns = {
            column.name for column in model.__table__.columns if isinstance(column.type, Integer)
        }

        unknown = sorted({key for row in rows for key in row} - columns)
        if unknown:
            logger.warning(f"Sheet '{sheet_name}' has columns with no matching field, ignoring: {unknown}")

        # Keyed by business id so a repeated id keeps its last occurrence
        records: Dict[Any, Dict[str, Any]] = {}
        skipped = 0
        for row in rows:
            coerced = coerce_row({key: value for key, value in row.items() if key in columns})
            record = {key: _storable(value, key in integer_columns) for key, value in coerced.items()}
            if record.get("id") is None:
                skipped += 1
                continue
            records[record["id"]] = record

        if skipped:
            logger.warning(f"Sheet '{sheet_name}': skipped {skipped} rows without an id")
        return list(records.values()), skipped

    def _upsert_statement(self, db: Session, model, records: List[Dict[str, Any]]):
        dialect = db.get_bind().dialect.name
        insert = _DIALECT_INSERTS.get(dialect)
        if insert is None:
            raise RuntimeError(f"Upsert is not supported for the '{dialect}' dialect")

        stmt = insert(model).values(records)
        update_columns = {key: stmt.excluded[key] for key in records[0] if key != "id"}
        if not update_columns:
            return stmt.on_conflict_do_nothing(index_elements=["id"])
        return stmt.on_conflict_do_update(index_elements=["id"], set_=update_columns)

    def _import_sheet(self, sheet_name: str, model, rows: List[Dict[str, Any]]):
        records, skipped = self._prepare_records(sheet_name, model, rows)
        if not records:
            return 0, skipped

        with self.session_factory() as db:
            try:
                for i in range(0, len(records), self.chunk_size):
                    chunk = records[i:i + self.chunk_size]
                    db.execute(self._upsert_statement(db, model, chunk))
                db.commit()
            except Exception as e:
                db.rollback()
                raise ReferenceBatchError(sheet_name, e) from e

        return len(records), skipped


def main(argv=None):
    from airport_api.config import settings
    from airport_api.database import Base, build_session_factory, create_db_engine

    parser = argparse.ArgumentParser(description="Load countries, cities and airports from the reference workbook.")
    parser.add_argument("--workbook", default=settings.reference_workbook_path, help="Path to the reference workbook")
    parser.add_argument("--force", action="store_true", help="Import even if countries already exist")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    engine = create_db_engine(settings.database_url, settings.db_pool_size, settings.db_max_overflow)
    try:
        Base.metadata.create_all(bind=engine)
        importer = ReferenceImporter(build_session_factory(engine), args.workbook, settings.import_chunk_size)
        importer.run(force=args.force)
    finally:
        engine.dispose()


if __name__ == "__main__":
    main()
