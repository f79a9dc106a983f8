# Outbound service clients

from .plant_client import PlantClient

__all__ = ["PlantClient"]
