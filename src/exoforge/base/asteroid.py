from dataclasses import dataclass, field
from enum import Enum
from typing import List

import astropy.units as u
import pandas as pd


class BeltKind(Enum):
    INNER = "inner"
    OUTER = "outer"


class BeltComposition(Enum):
    ROCKY = "rocky"
    METALLIC = "metallic"
    ICY = "icy"


class AsteroidComposition(Enum):
    CARBONACEOUS = "carbonaceous"
    SILICATE = "silicate"
    METALLIC = "metallic"
    ICY = "icy"


class Asteroid:
    """
    A major body of an asteroid belt
    """

    kind = "asteroid"

    def __init__(self, asteroid_dict):
        for att, value in asteroid_dict.items():
            setattr(self, att, value)

    def __repr__(self):
        return f"{type(self).__name__} object\n{pd.DataFrame(self.dump_params(), index=[0])}"

    def dump_params(self):
        return {
            "id": self.id,
            "belt_id": self.belt_id,
            "composition": self.composition.value,
            "a": self.a.to_value(u.AU),
            "e": self.e,
            "diameter": self.diameter.to_value(u.km),
            "mass": self.mass.to_value(u.kg),
        }


@dataclass
class AsteroidBelt:
    """
    A belt occupying [inner, outer] around one orbit host. Radii are in AU
    and the total mass in Earth masses.
    """

    id: str
    host_id: str
    kind: BeltKind
    composition: BeltComposition
    inner_au: float
    outer_au: float
    mass_mearth: float
    asteroid_ids: List[str] = field(default_factory=list)

    MAX_MAJOR_ASTEROIDS = 10

    @property
    def width_au(self):
        return self.outer_au - self.inner_au

    @property
    def center_au(self):
        return 0.5 * (self.inner_au + self.outer_au)

    def contains(self, a_au):
        return self.inner_au <= a_au <= self.outer_au

    def to_dict(self):
        return {
            "id": self.id,
            "host_id": self.host_id,
            "kind": self.kind.value,
            "composition": self.composition.value,
            "inner_au": self.inner_au,
            "outer_au": self.outer_au,
            "mass_mearth": self.mass_mearth,
            "asteroid_ids": list(self.asteroid_ids),
        }
