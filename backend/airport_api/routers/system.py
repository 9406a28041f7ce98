from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import func
from airport_api.database import get_db
from airport_api.models import Airport, City, Country

router = APIRouter(prefix="/system-health", tags=["System"])

@router.get("")
def get_system_health(db: Session = Depends(get_db)):
    total_countries = db.query(func.count(Country.id)).scalar() or 0
    total_cities = db.query(func.count(City.id)).scalar() or 0
    total_airports = db.query(func.count(Airport.id)).scalar() or 0

    return {
        "total_countries": total_countries,
        "total_cities": total_cities,
        "total_airports": total_airports,
        "reference_data_loaded": total_countries > 0
    }
