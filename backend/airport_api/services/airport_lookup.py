import logging

from airport_api.errors import AirportNotFoundError, StorageFailureError
from airport_api.repositories.airport_repository import AirportRecord, AirportRepository
from airport_api.schemas.airport_schema import (
    AddressResponse,
    AirportEnvelope,
    AirportResponse,
    CityResponse,
    CountryResponse,
)

logger = logging.getLogger(__name__)


class AirportLookupService:
    def __init__(self, repository: AirportRepository):
        self.repository = repository

    def execute(self, iata_code: str) -> AirportEnvelope:
        """
        Resolve an airport with its city and country.
        Storage faults propagate as StorageFailureError; every other failure reads as not found.
        """
        try:
            record = self.repository.find_by_iata_code(iata_code)
            if record is None:
                raise AirportNotFoundError(f"No airport with IATA code {iata_code}")
            return self._shape(record)
        except (StorageFailureError, AirportNotFoundError):
            raise
        except Exception as e:
            raise AirportNotFoundError.from_fault(e) from e

    @staticmethod
    def _shape(record: AirportRecord) -> AirportEnvelope:
        airport = record.airport
        city = CityResponse.model_validate(record.city) if record.city is not None else None
        country = CountryResponse.model_validate(record.country) if record.country is not None else None

        return AirportEnvelope(
            airport=AirportResponse(
                id=airport.id,
                icao_code=airport.icao_code,
                iata_code=airport.iata_code,
                name=airport.name,
                type=airport.type,
                latitude_deg=airport.latitude_deg,
                longitude_deg=airport.longitude_deg,
                elevation_ft=airport.elevation_ft or None,
                address=AddressResponse(city=city, country=country),
            )
        )
