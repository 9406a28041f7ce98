from sqlalchemy import Column, Integer, String, Float, DateTime, Text
from sqlalchemy.sql import func
from airport_api.database import Base

class Airport(Base):
    __tablename__ = "airports"

    id = Column(Integer, primary_key=True, autoincrement=False)
    icao_code = Column(String(4), nullable=True)
    iata_code = Column(String(3), unique=True, index=True, nullable=True) # External lookup key, never joined on
    name = Column(String(255), nullable=True)
    type = Column(String(50), nullable=True)

    # Soft references, resolved at read time by the repository
    city_id = Column(Integer, nullable=True, index=True)
    country_id = Column(Integer, nullable=True, index=True)
    continent_id = Column(Integer, nullable=True)

    website_url = Column(Text, nullable=True)
    wikipedia_link = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.current_timestamp(), nullable=True)
    updated_at = Column(DateTime, server_default=func.current_timestamp(), nullable=True)
    latitude_deg = Column(Float, nullable=True)
    longitude_deg = Column(Float, nullable=True)
    elevation_ft = Column(Integer, nullable=True)
