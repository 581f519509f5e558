__all__ = [
    "Asteroid",
    "AsteroidBelt",
    "AsteroidComposition",
    "BeltComposition",
    "BeltKind",
    "Moon",
    "Planet",
    "Provenance",
    "Star",
    "System",
]

from .asteroid import Asteroid, AsteroidBelt, AsteroidComposition, BeltComposition, BeltKind
from .planet import Moon, Planet
from .star import Star
from .system import Provenance, System
