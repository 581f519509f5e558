__all__ = [
    "PlanetArchetype",
    "find_gap",
    "host_context",
    "place_belts",
    "place_moons",
    "place_planets",
    "place_planets_targeted",
]

from .belts import find_gap, place_belts
from .moons import place_moons
from .planets import PlanetArchetype, host_context, place_planets, place_planets_targeted
