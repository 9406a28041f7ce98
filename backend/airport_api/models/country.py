from sqlalchemy import Column, Integer, String
from airport_api.database import Base

class Country(Base):
    __tablename__ = "countries"

    id = Column(Integer, primary_key=True, autoincrement=False) # Business id from the source workbook
    name = Column(String(100), nullable=True)
    alt_name = Column(String(100), nullable=True)
    country_code_two = Column(String(2), nullable=True)
    country_code_three = Column(String(3), nullable=True)
    flag_app = Column(String(255), nullable=True)
    mobile_code = Column(Integer, nullable=True)
    continent_id = Column(Integer, nullable=True)
    country_flag = Column(String(255), nullable=True)
