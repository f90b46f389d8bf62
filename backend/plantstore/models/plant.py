import enum
import uuid

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, Numeric, String, Text, func

from plantstore.db import Base


class PlantCategory(str, enum.Enum):
    INDOOR = "Indoor"
    OUTDOOR = "Outdoor"
    SUCCULENT = "Succulent"
    AIR_PURIFYING = "Air Purifying"
    HOME_DECOR = "Home Decor"
    FLOWERING = "Flowering"
    FOLIAGE = "Foliage"
    MEDICINAL = "Medicinal"


class LightRequirement(str, enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


def new_plant_id() -> str:
    return uuid.uuid4().hex


class Plant(Base):
    __tablename__ = "plants"

    id = Column(String(32), primary_key=True, default=new_plant_id)
    name = Column(String(100), nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    categories = Column(JSON, nullable=False, default=list)
    is_available = Column(Boolean, nullable=False, default=True)
    description = Column(String(500), nullable=True)
    scientific_name = Column(String(200), nullable=True)
    image = Column(String(512), nullable=True)
    light_requirement = Column(String(16), nullable=False, default=LightRequirement.MEDIUM.value)
    watering_frequency = Column(String(64), nullable=True)
    pot_size = Column(String(64), nullable=True)
    care_instructions = Column(Text, nullable=True)
    popularity = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Plant id={self.id} name={self.name}>"
