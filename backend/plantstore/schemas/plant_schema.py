from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PlantOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)
    id: str
    name: str
    price: Decimal
    categories: List[str]
    is_available: bool
    description: Optional[str] = None
    scientific_name: Optional[str] = None
    image: Optional[str] = None
    light_requirement: Optional[str] = None
    watering_frequency: Optional[str] = None
    pot_size: Optional[str] = None
    care_instructions: Optional[str] = None
    popularity: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
