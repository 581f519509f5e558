"""Contracts between the system layer and the per-object generators.

The system layer decides *where* an object goes and *what kind* it is; a leaf
generator decides everything else about it. The system layer pins values it
cares about through a spec's ``overrides`` mapping. Each spec kind accepts a
fixed set of override keys, anything else is rejected when the spec object is built.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Dict, Optional, Protocol, Tuple

import numpy as np


def _check_overrides(kind: str, overrides: Dict[str, Any], accepted: Tuple[str, ...]) -> None:
    unknown = sorted(set(overrides) - set(accepted))
    if unknown:
        raise ValueError(
            f"Unsupported {kind} override(s) {unknown}, expected any of {list(accepted)}"
        )


@dataclass
class BodySpec:
    """Base for all leaf specs."""

    body_id: str
    overrides: Dict[str, Any] = field(default_factory=dict)

    KIND: ClassVar[str] = "body"
    ACCEPTED_OVERRIDES: ClassVar[Tuple[str, ...]] = ()

    def __post_init__(self) -> None:
        _check_overrides(self.KIND, self.overrides, self.ACCEPTED_OVERRIDES)

    def override(self, key: str, default: Any) -> Any:
        return self.overrides.get(key, default)


@dataclass
class StarSpec(BodySpec):
    spectral_class: Optional[str] = None
    age_gyr: float = 4.6
    metallicity: float = 0.0

    KIND: ClassVar[str] = "star"
    ACCEPTED_OVERRIDES: ClassVar[Tuple[str, ...]] = (
        "mass",
        "radius",
        "luminosity",
        "temperature",
    )


@dataclass
class PlanetSpec(BodySpec):
    archetype: str = "rocky"
    host_id: str = ""
    slot_index: int = -1

    KIND: ClassVar[str] = "planet"
    ACCEPTED_OVERRIDES: ClassVar[Tuple[str, ...]] = (
        "semi_major_axis",
        "eccentricity",
        "mass",
        "radius",
    )


@dataclass
class MoonSpec(BodySpec):
    parent_id: str = ""
    captured: bool = False
    icy: bool = False

    KIND: ClassVar[str] = "moon"
    ACCEPTED_OVERRIDES: ClassVar[Tuple[str, ...]] = (
        "semi_major_axis",
        "eccentricity",
        "mass",
        "radius",
    )


@dataclass
class AsteroidSpec(BodySpec):
    belt_id: str = ""
    composition: str = "silicate"

    KIND: ClassVar[str] = "asteroid"
    ACCEPTED_OVERRIDES: ClassVar[Tuple[str, ...]] = (
        "semi_major_axis",
        "eccentricity",
        "diameter",
    )


@dataclass(frozen=True)
class ParentContext:
    """
    What a leaf generator may know about its surroundings. Masses of stars are
    in Msun, planet masses in Mearth, planet radii in Rearth, distances in AU.
    """

    stellar_mass: float
    stellar_luminosity: float
    stellar_temperature: float
    age_gyr: float
    metallicity: float
    orbital_distance: float = 0.0
    parent_mass: float = 0.0
    parent_radius: float = 0.0

    def at(self, orbital_distance: float) -> "ParentContext":
        return replace(self, orbital_distance=orbital_distance)

    def around(self, parent_mass: float, parent_radius: float) -> "ParentContext":
        return replace(self, parent_mass=parent_mass, parent_radius=parent_radius)


class StarGenerator(Protocol):
    def generate(self, spec: StarSpec, rng: np.random.Generator): ...


class PlanetGenerator(Protocol):
    def generate(self, spec: PlanetSpec, context: ParentContext, rng: np.random.Generator): ...


class MoonGenerator(Protocol):
    def generate(self, spec: MoonSpec, context: ParentContext, rng: np.random.Generator): ...


class AsteroidGenerator(Protocol):
    def generate(self, spec: AsteroidSpec, context: ParentContext, rng: np.random.Generator): ...
