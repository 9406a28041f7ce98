from airport_api.models.country import Country
from airport_api.models.city import City
from airport_api.models.airport import Airport

__all__ = ["Country", "City", "Airport"]
