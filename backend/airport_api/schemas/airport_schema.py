from pydantic import BaseModel, ConfigDict
from typing import Optional

class CityResponse(BaseModel):
    id: int
    name: Optional[str] = None
    country_id: Optional[int] = None
    is_active: bool
    lat: Optional[float] = None
    long: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)

class CountryResponse(BaseModel):
    # alt_name and flag assets stay internal
    id: int
    name: Optional[str] = None
    country_code_two: Optional[str] = None
    country_code_three: Optional[str] = None
    mobile_code: Optional[int] = None
    continent_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)

class AddressResponse(BaseModel):
    city: Optional[CityResponse] = None
    country: Optional[CountryResponse] = None

class AirportResponse(BaseModel):
    id: int
    icao_code: Optional[str] = None
    iata_code: str
    name: Optional[str] = None
    type: Optional[str] = None
    latitude_deg: Optional[float] = None
    longitude_deg: Optional[float] = None
    elevation_ft: Optional[int] = None
    address: AddressResponse

class AirportEnvelope(BaseModel):
    airport: AirportResponse

class ErrorResponse(BaseModel):
    error: str
