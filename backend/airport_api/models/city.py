from sqlalchemy import Column, Integer, String, Float, Boolean
from airport_api.database import Base

class City(Base):
    __tablename__ = "cities"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(150), nullable=True)
    country_id = Column(Integer, nullable=True, index=True) # Soft reference to countries.id, no FK constraint
    is_active = Column(Boolean, nullable=False, default=False)
    lat = Column(Float, nullable=True)
    long = Column(Float, nullable=True)
