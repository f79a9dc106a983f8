"""Embedded plant catalog used when the catalog service is unreachable"""

from typing import Optional
from ..models.plant import Plant

# Fallback catalog
FALLBACK_PLANTS: dict[str, Plant] = {
    "bird-of-paradise": Plant(
        id="bird-of-paradise",
        name="Bird of Paradise Plant",
        description="A stunning tropical plant with large, paddle-shaped leaves and exotic orange and blue flowers.",
        price=1499,
        original_price=1799,
        category="rare",
        images=["https://images.unsplash.com/photo-1598300042247-d088f8ab3a91?w=800&h=800&fit=crop"],
        in_stock=True,
        stock_quantity=12,
        features=["Exotic flowers", "Large decorative leaves", "Air purifying"],
        care_level="Medium",
        sunlight="High",
        watering="Medium",
        pet_friendly=False,
        low_maintenance=False,
        rating=4.8,
        review_count=156,
        featured=True,
        trending=True,
        new=False,
    ),
    "monstera-deliciosa": Plant(
        id="monstera-deliciosa",
        name="Monstera Deliciosa",
        description="The iconic Swiss cheese plant with beautiful split leaves. A stunning statement piece for any modern home.",
        price=899,
        original_price=1099,
        category="indoor",
        images=["https://images.unsplash.com/photo-1506905925346-21bda4d32df4?w=800&h=800&fit=crop"],
        in_stock=True,
        stock_quantity=30,
        features=["Split leaves", "Air purifying", "Fast growing"],
        care_level="Easy",
        sunlight="Medium",
        watering="Medium",
        pet_friendly=False,
        low_maintenance=True,
        rating=4.8,
        review_count=567,
        featured=True,
        trending=True,
        new=False,
    ),
    "snake-plant": Plant(
        id="snake-plant",
        name="Snake Plant (Sansevieria)",
        description="Nearly indestructible plant perfect for beginners. Excellent air purifier that thrives in low light conditions.",
        price=599,
        original_price=799,
        category="indoor",
        images=["https://images.unsplash.com/photo-1572688484438-313a6e50c333?w=800&h=800&fit=crop"],
        in_stock=True,
        stock_quantity=50,
        features=["Low light tolerant", "Air purifying", "Very low maintenance"],
        care_level="Easy",
        sunlight="Low",
        watering="Low",
        pet_friendly=False,
        low_maintenance=True,
        rating=4.9,
        review_count=1203,
        featured=True,
        trending=False,
        new=False,
    ),
}


def get_fallback_plant(plant_id: str) -> Optional[Plant]:
    """Look up a plant in the embedded catalog"""
    plant = FALLBACK_PLANTS.get(plant_id)
    return plant.model_copy(deep=True) if plant else None
