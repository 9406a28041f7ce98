"""Pytest configuration and fixtures."""

import os

# Settings are read at import time; point them at an in-memory database
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("IMPORT_ON_STARTUP", "false")

import pandas as pd
import pytest
from fastapi.testclient import TestClient

from airport_api.config import Settings
from airport_api.database import Base, build_session_factory, create_db_engine
from airport_api.main import create_app
from airport_api.models import Airport, City, Country


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def seeded(session_factory):
    """India / New Delhi / DEL plus an airport whose references dangle."""
    with session_factory() as db:
        db.add_all([
            Country(
                id=1, name="India", alt_name="Bharat", country_code_two="IN",
                country_code_three="IND", flag_app="in.png", mobile_code=91,
                continent_id=4, country_flag="flag-in.svg",
            ),
            City(id=10, name="New Delhi", country_id=1, is_active=True, lat=28.6139, long=77.209),
            Airport(
                id=100, icao_code="VIDP", iata_code="DEL",
                name="Indira Gandhi International Airport", type="large_airport",
                city_id=10, country_id=1, continent_id=4,
                latitude_deg=28.5665, longitude_deg=77.1031, elevation_ft=0,
            ),
            Airport(
                id=101, icao_code="VABB", iata_code="BOM",
                name="Chhatrapati Shivaji Maharaj International Airport", type="large_airport",
                city_id=10, country_id=1, continent_id=4,
                latitude_deg=19.0887, longitude_deg=72.8679, elevation_ft=39,
            ),
            Airport(
                id=102, icao_code="XXXX", iata_code="ORP", name="Orphan Field",
                type="small_airport", city_id=None, country_id=999, continent_id=None,
                latitude_deg=1.5, longitude_deg=2.5, elevation_ft=120,
            ),
        ])
        db.commit()


@pytest.fixture
def write_workbook(tmp_path):
    """Factory writing {sheet name: [row dicts]} to an .xlsx file and returning its path."""

    def _write(sheets, filename="Database.xlsx"):
        path = tmp_path / filename
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            for sheet_name, rows in sheets.items():
                pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, index=False)
        return str(path)

    return _write


@pytest.fixture
def reference_sheets():
    return {
        "countries": [
            {
                "id": 1, "name": "  India ", "alt_name": "Bharat", "country_code_two": "IN",
                "country_code_three": "IND", "flag_app": "in.png", "mobile_code": "91",
                "continent_id": 4, "country_flag": "flag-in.svg",
            },
            {
                "id": 2, "name": "Japan", "alt_name": None, "country_code_two": "JP",
                "country_code_three": "JPN", "flag_app": None, "mobile_code": 81,
                "continent_id": 4, "country_flag": None,
            },
        ],
        "cities": [
            {"id": 10, "name": "New Delhi", "country_id": 1, "is_active": "True", "lat": "28.6139", "long": 77.209},
            {"id": 20, "name": "Tokyo", "country_id": 2, "is_active": 0, "lat": 35.6762, "long": 139.6503},
        ],
        "airports": [
            {
                "id": 100, "icao_code": "VIDP", "iata_code": "DEL",
                "name": "Indira Gandhi International Airport", "type": "large_airport",
                "city_id": 10, "country_id": 1, "continent_id": 4,
                "website_url": "https://www.newdelhiairport.in", "wikipedia_link": None,
                "created_at": "2024-01-15T10:00:00", "updated_at": None,
                "latitude_deg": 28.5665, "longitude_deg": 77.1031, "elevation_ft": 777,
            },
            {
                "id": 200, "icao_code": "RJTT", "iata_code": "HND",
                "name": "Tokyo Haneda Airport", "type": "large_airport",
                "city_id": 20, "country_id": 2, "continent_id": 4,
                "website_url": None, "wikipedia_link": "https://en.wikipedia.org/wiki/Haneda_Airport",
                "created_at": None, "updated_at": None,
                "latitude_deg": 35.5523, "longitude_deg": 139.7798, "elevation_ft": 35,
            },
        ],
    }


@pytest.fixture
def make_client(engine):
    """Factory for a TestClient over an app bound to the test engine."""
    clients = []

    def _make(raise_server_exceptions=True, **overrides):
        options = {"database_url": "sqlite://", "import_on_startup": False}
        options.update(overrides)
        app = create_app(Settings(**options), engine=engine)
        client = TestClient(app, raise_server_exceptions=raise_server_exceptions)
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client, seeded):
    return make_client()
