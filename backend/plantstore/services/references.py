"""
Plant reference checks and read-time hydration shared by carts and wishlists.

A plant reference is the 32-character lowercase hex form of a UUID. Anything
``uuid.UUID`` accepts but that is not already in that exact form (upper case,
dashes, braces, ``urn:uuid:`` prefix) is rejected, so two spellings of the
same id can never end up as two different lines.
"""
import uuid
from typing import Any, Callable, Dict, Iterable, List, TypeVar

from plantstore.errors import InvalidArgument
from plantstore.models.plant import Plant
from plantstore.repositories.plant_repo import PlantRepository

T = TypeVar("T")


def is_valid_plant_reference(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        parsed = uuid.UUID(value)
    except (ValueError, AttributeError):
        return False
    return parsed.hex == value


def validate_plant_reference(value: Any) -> str:
    if value is None or value == "":
        raise InvalidArgument("Plant ID is required")
    if not is_valid_plant_reference(value):
        raise InvalidArgument("Invalid plant ID format")
    return value


def plant_summary(plant: Plant) -> Dict[str, Any]:
    """Plant attributes shown next to a cart or wishlist entry."""
    return {
        "id": plant.id,
        "name": plant.name,
        "price": plant.price,
        "categories": list(plant.categories or []),
        "isAvailable": plant.is_available,
        "image": plant.image,
        "scientificName": plant.scientific_name,
        "lightRequirement": plant.light_requirement,
    }


def hydrate(
    items: Iterable[T],
    catalog: PlantRepository,
    render: Callable[[T, Plant], Dict[str, Any]],
) -> List[Dict[str, Any]]:
    """
    Join stored entries with their current plant in one catalogue query.

    Entries whose plant no longer resolves are left out of the result; the
    stored entries themselves are not touched.
    """
    items = list(items)
    plants = catalog.resolve_many(it.plant_id for it in items)
    return [render(it, plants[it.plant_id]) for it in items if it.plant_id in plants]
