"""Tests for the IATA lookup with city / country resolution."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from airport_api.errors import ErrorKind, StorageFailureError
from airport_api.repositories.airport_repository import AirportRecord, AirportRepository


class TestFindByIataCode:
    def test_resolves_city_and_country(self, db_session, seeded) -> None:
        record = AirportRepository(db_session).find_by_iata_code("DEL")

        assert isinstance(record, AirportRecord)
        assert record.airport.id == 100
        assert record.city.name == "New Delhi"
        assert record.country.country_code_three == "IND"

    def test_dangling_references_resolve_to_none(self, db_session, seeded) -> None:
        record = AirportRepository(db_session).find_by_iata_code("ORP")

        assert record is not None
        assert record.airport.name == "Orphan Field"
        assert record.city is None
        assert record.country is None

    def test_unknown_code_returns_none(self, db_session, seeded) -> None:
        assert AirportRepository(db_session).find_by_iata_code("ZZZ") is None

    def test_lookup_is_exact_match(self, db_session, seeded) -> None:
        assert AirportRepository(db_session).find_by_iata_code("del") is None

    def test_database_fault_raises_storage_failure(self) -> None:
        db = MagicMock()
        db.query.side_effect = OperationalError("SELECT", {}, Exception("server closed the connection"))

        with pytest.raises(StorageFailureError) as excinfo:
            AirportRepository(db).find_by_iata_code("DEL")

        assert excinfo.value.kind == ErrorKind.STORAGE_FAILURE
        assert isinstance(excinfo.value.__cause__, OperationalError)

    def test_other_faults_propagate_unchanged(self) -> None:
        db = MagicMock()
        db.query.side_effect = KeyError("iata_code")

        with pytest.raises(KeyError):
            AirportRepository(db).find_by_iata_code("DEL")
