__all__ = [
    "ArchetypePlanetGenerator",
    "AsteroidGenerator",
    "AsteroidSpec",
    "Generators",
    "MainSequenceStarGenerator",
    "MinorBodyGenerator",
    "MoonGenerator",
    "MoonSpec",
    "ParentContext",
    "PlanetGenerator",
    "PlanetSpec",
    "SatelliteGenerator",
    "StarGenerator",
    "StarSpec",
]

from dataclasses import dataclass, field

from .asteroid import MinorBodyGenerator
from .contracts import (
    AsteroidGenerator,
    AsteroidSpec,
    MoonGenerator,
    MoonSpec,
    ParentContext,
    PlanetGenerator,
    PlanetSpec,
    StarGenerator,
    StarSpec,
)
from .moon import SatelliteGenerator
from .planet import ArchetypePlanetGenerator
from .star import MainSequenceStarGenerator


@dataclass
class Generators:
    """
    The leaf generators a system generation call delegates to
    """

    star: StarGenerator = field(default_factory=MainSequenceStarGenerator)
    planet: PlanetGenerator = field(default_factory=ArchetypePlanetGenerator)
    moon: MoonGenerator = field(default_factory=SatelliteGenerator)
    asteroid: AsteroidGenerator = field(default_factory=MinorBodyGenerator)
