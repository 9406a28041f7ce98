from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging
import re

from airport_api.database import get_db
from airport_api.errors import InvalidIataCodeError
from airport_api.repositories.airport_repository import AirportRepository
from airport_api.schemas.airport_schema import AirportEnvelope, ErrorResponse
from airport_api.services.airport_lookup import AirportLookupService

logger = logging.getLogger(__name__)

IATA_CODE_PATTERN = re.compile(r"[A-Z]{3}")

router = APIRouter(
    prefix="/api/airports",
    tags=["Airports"]
)

def get_airport_lookup(db: Session = Depends(get_db)) -> AirportLookupService:
    return AirportLookupService(AirportRepository(db))

@router.get(
    "/{iata_code}",
    response_model=AirportEnvelope,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid IATA code format"},
        404: {"model": ErrorResponse, "description": "Airport not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
def get_airport(iata_code: str, lookup: AirportLookupService = Depends(get_airport_lookup)):
    """
    Get airport details by 3-letter uppercase IATA code, with its city and country.
    """
    if not IATA_CODE_PATTERN.fullmatch(iata_code):
        raise InvalidIataCodeError(f"Rejected IATA code {iata_code!r}")

    return lookup.execute(iata_code)
