#!/usr/bin/env python3
"""
Seed the plant catalogue from a JSON file, or from the built-in sample list.

Entries may use camelCase (scientificName, isAvailable) or snake_case keys.
Plants are matched by name, so running the script twice updates rather than
duplicates.

Usage:
    python scripts/seed_plants.py
    python scripts/seed_plants.py --file plants.json --reset
"""
import argparse
import json
import logging
import os
import sys
from decimal import Decimal, InvalidOperation

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from plantstore.db import init_db, store
from plantstore.models.plant import LightRequirement, PlantCategory
from plantstore.repositories.plant_repo import PlantRepository

log = logging.getLogger("seed")

SAMPLE_PLANTS = [
    {
        "name": "Money Plant (Golden Pothos)",
        "price": 299,
        "categories": ["Indoor", "Air Purifying", "Home Decor"],
        "description": "Easy-to-care trailing plant that brings prosperity and purifies air naturally",
        "scientificName": "Epipremnum aureum",
        "lightRequirement": "Low",
        "wateringFrequency": "Weekly",
        "potSize": "Medium",
        "careInstructions": "Water when topsoil feels dry. Prefers indirect light.",
        "popularity": 95,
    },
    {
        "name": "Snake Plant (Sansevieria)",
        "price": 499,
        "categories": ["Indoor", "Air Purifying", "Succulent"],
        "description": "Extremely low maintenance plant perfect for beginners and dark spaces",
        "scientificName": "Sansevieria trifasciata",
        "lightRequirement": "Low",
        "wateringFrequency": "Bi-weekly",
        "potSize": "Large",
        "careInstructions": "Water sparingly. Can tolerate neglect and low light.",
        "popularity": 90,
    },
    {
        "name": "Peace Lily",
        "price": 699,
        "categories": ["Indoor", "Air Purifying", "Flowering"],
        "description": "Elegant flowering plant that blooms beautiful white flowers",
        "scientificName": "Spathiphyllum wallisii",
        "lightRequirement": "Medium",
        "wateringFrequency": "Weekly",
        "potSize": "Medium",
        "careInstructions": "Keep soil moist but not waterlogged. Enjoys humidity.",
        "popularity": 85,
    },
    {
        "name": "Rubber Plant (Ficus)",
        "price": 799,
        "categories": ["Indoor", "Foliage", "Home Decor"],
        "description": "Glossy burgundy leaves make this plant a stunning statement piece",
        "scientificName": "Ficus elastica",
        "lightRequirement": "High",
        "wateringFrequency": "Weekly",
        "potSize": "Large",
        "careInstructions": "Bright, indirect light. Water when topsoil is dry.",
        "popularity": 80,
    },
    {
        "name": "Aloe Vera",
        "price": 349,
        "categories": ["Indoor", "Outdoor", "Succulent", "Medicinal"],
        "description": "Healing succulent plant with medicinal properties for skin care",
        "scientificName": "Aloe barbadensis miller",
        "lightRequirement": "High",
        "wateringFrequency": "Monthly",
        "potSize": "Small",
        "careInstructions": "Bright light, minimal water. Let soil dry completely between waterings.",
        "popularity": 88,
    },
]

_CAMEL_TO_SNAKE = {
    "isAvailable": "is_available",
    "scientificName": "scientific_name",
    "lightRequirement": "light_requirement",
    "wateringFrequency": "watering_frequency",
    "potSize": "pot_size",
    "careInstructions": "care_instructions",
}
_OPTIONAL = (
    "description",
    "scientific_name",
    "image",
    "light_requirement",
    "watering_frequency",
    "pot_size",
    "care_instructions",
    "popularity",
    "is_available",
)
_CATEGORIES = {c.value for c in PlantCategory}
_LIGHT = {l.value for l in LightRequirement}


def _normalize_entry(entry: dict) -> dict:
    """Return a dict of Plant column values, raising ValueError for unusable entries."""
    data = {_CAMEL_TO_SNAKE.get(k, k): v for k, v in entry.items()}
    name = (data.get("name") or "").strip()
    if not name:
        raise ValueError("missing name")
    try:
        price = Decimal(str(data.get("price", 0)))
    except InvalidOperation:
        raise ValueError(f"{name}: bad price {data.get('price')!r}")
    if price < 0:
        raise ValueError(f"{name}: price cannot be negative")
    categories = data.get("categories") or []
    unknown = set(categories) - _CATEGORIES
    if not categories or unknown:
        raise ValueError(f"{name}: categories must be a non-empty subset of {sorted(_CATEGORIES)}")
    if data.get("light_requirement") and data["light_requirement"] not in _LIGHT:
        raise ValueError(f"{name}: unknown light requirement {data['light_requirement']!r}")

    out = {"name": name, "price": price, "categories": categories}
    out.update({k: data[k] for k in _OPTIONAL if data.get(k) is not None})
    return out


def seed(entries, reset: bool = False) -> int:
    init_db(reset=reset)
    db = store.session()
    repo = PlantRepository(db)
    created = 0
    try:
        for entry in entries:
            try:
                values = _normalize_entry(entry)
            except ValueError as e:
                log.warning("skipping entry: %s", e)
                continue
            repo.create_or_update(**values)
            created += 1
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
    log.info("seeded %d plants", created)
    return created


def load_entries(path: str):
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("plants") or data.get("data") or list(data.values())
    return data if isinstance(data, list) else []


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=None, help="JSON list of plants (defaults to the built-in samples)")
    parser.add_argument("--reset", action="store_true", help="drop and recreate all tables first")
    args = parser.parse_args()
    if args.file and not os.path.exists(args.file):
        print("File not found:", args.file)
        sys.exit(1)
    seed(load_entries(args.file) if args.file else SAMPLE_PLANTS, reset=args.reset)
