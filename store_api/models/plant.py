"""Plant models for the storefront"""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Optional, Union


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys on the wire"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class Plant(CamelModel):
    """Plant as returned by the catalog service"""
    id: str
    name: str
    description: str = ""
    price: Union[int, float] = Field(ge=0)
    original_price: Optional[Union[int, float]] = None
    category: Optional[str] = None
    images: list[str] = []
    in_stock: bool = True
    stock_quantity: int = Field(ge=0, default=0)
    features: list[str] = []
    care_level: Optional[str] = None
    sunlight: Optional[str] = None
    watering: Optional[str] = None
    pet_friendly: bool = False
    low_maintenance: bool = False
    rating: Optional[float] = None
    review_count: int = 0
    featured: bool = False
    trending: bool = False
    new: bool = False

    class Config:
        # Catalog fields this service does not know about are kept as-is
        extra = "allow"
