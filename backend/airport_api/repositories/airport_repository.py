import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from airport_api.errors import StorageFailureError
from airport_api.models import Airport, City, Country

logger = logging.getLogger(__name__)


@dataclass
class AirportRecord:
    """An airport with its soft references resolved. city/country are None when dangling."""

    airport: Airport
    city: Optional[City] = None
    country: Optional[Country] = None


class AirportRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_iata_code(self, iata_code: str) -> Optional[AirportRecord]:
        """
        Fetch one airport by IATA code and resolve city_id / country_id against the
        city and country business ids. Outer joins keep the airport when a reference dangles.
        Raises StorageFailureError on any database fault.
        """
        try:
            row = (
                self.db.query(Airport, City, Country)
                .outerjoin(City, City.id == Airport.city_id)
                .outerjoin(Country, Country.id == Airport.country_id)
                .filter(Airport.iata_code == iata_code)
                .first()
            )
        except SQLAlchemyError as e:
            logger.error(f"Repository Error: airport lookup for {iata_code} failed: {e}", exc_info=True)
            raise StorageFailureError("Database operation failed") from e

        if row is None:
            return None

        airport, city, country = row
        return AirportRecord(airport=airport, city=city, country=country)
