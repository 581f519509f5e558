import hashlib
import json
from dataclasses import dataclass, field
from enum import Enum

import astropy.units as u
import pandas as pd

GENERATOR_VERSION = "exoforge-0.3"
SCHEMA_VERSION = 1

BODY_KINDS = ("star", "planet", "moon", "asteroid")


@dataclass(frozen=True)
class Provenance:
    """
    What is needed to regenerate a system: the seed, the GenerationSpec it
    was generated from and the versions of the generator and output schema
    """

    seed: int
    generator_version: str
    schema_version: int
    timestamp: str
    specification: dict = field(default_factory=dict)

    def to_dict(self):
        return {
            "seed": self.seed,
            "generator_version": self.generator_version,
            "schema_version": self.schema_version,
            "timestamp": self.timestamp,
            "specification": self.specification,
        }


def _plain(value):
    """
    Convert a parameter value into something json can hold
    """
    if isinstance(value, u.Quantity):
        return float(value.value)
    if isinstance(value, Enum):
        return value.value
    if hasattr(value, "item"):
        return value.item()
    return value


class System:
    """
    A generated system: its stars, planets, moons and asteroids indexed by
    id, the stellar hierarchy, the orbit hosts with their slots, and the
    asteroid belts.
    """

    def __init__(self, bodies, hierarchy, hosts, slots, belts, provenance) -> None:
        self.bodies = {}
        self.star_ids = []
        self.planet_ids = []
        self.moon_ids = []
        self.asteroid_ids = []
        for body in bodies:
            self.add_body(body)
        self.hierarchy = hierarchy
        self.hosts = list(hosts)
        self.slots = {host_id: list(host_slots) for host_id, host_slots in slots.items()}
        self.belts = list(belts)
        self.provenance = provenance

    def __repr__(self):
        return (
            f"System seed:{self.provenance.seed}\t"
            f"Stars:{len(self.star_ids)}\tHosts:{len(self.hosts)}\t"
            f"Belts:{len(self.belts)}\n\n"
            f"Planets:\n{self.get_p_df()}"
        )

    def add_body(self, body):
        if body.id in self.bodies:
            raise ValueError(f"Duplicate body id {body.id!r}")
        self.bodies[body.id] = body
        getattr(self, f"{body.kind}_ids").append(body.id)

    def get(self, body_id):
        return self.bodies[body_id]

    @property
    def stars(self):
        return [self.bodies[i] for i in self.star_ids]

    @property
    def planets(self):
        return [self.bodies[i] for i in self.planet_ids]

    @property
    def moons(self):
        return [self.bodies[i] for i in self.moon_ids]

    @property
    def asteroids(self):
        return [self.bodies[i] for i in self.asteroid_ids]

    def getpattr(self, attr, kind="planet"):
        # Return array of an attribute of every body of a kind, e.g. all
        # planet semi-major axes
        bodies = [self.bodies[i] for i in getattr(self, f"{kind}_ids")]
        if not bodies:
            return []
        if type(getattr(bodies[0], attr)) == u.Quantity:
            unit = getattr(bodies[0], attr).unit
            return [getattr(body, attr).to_value(unit) for body in bodies] * unit
        else:
            return [getattr(body, attr) for body in bodies]

    def get_p_df(self):
        return self.get_df("planet")

    def get_df(self, kind="planet"):
        """
        One row per body of ``kind`` with its dumped parameters
        """
        rows = [
            {key: _plain(val) for key, val in self.bodies[i].dump_params().items()}
            for i in getattr(self, f"{kind}_ids")
        ]
        return pd.DataFrame(rows)

    def to_dict(self, include_timestamp=True):
        """
        Nested plain representation of the system. Enum valued fields are
        stored as their lowercase string values.
        """
        provenance = self.provenance.to_dict()
        if not include_timestamp:
            provenance.pop("timestamp")
        return {
            "provenance": provenance,
            "hierarchy": self.hierarchy.to_dict(),
            "hosts": [host.to_dict() for host in self.hosts],
            "slots": {
                host_id: [slot.to_dict() for slot in host_slots]
                for host_id, host_slots in self.slots.items()
            },
            "belts": [belt.to_dict() for belt in self.belts],
            "bodies": {
                kind: {
                    body_id: {
                        key: _plain(val)
                        for key, val in self.bodies[body_id].dump_params().items()
                    }
                    for body_id in getattr(self, f"{kind}_ids")
                }
                for kind in BODY_KINDS
            },
        }

    def fingerprint(self):
        """
        sha256 of the system without its timestamp, equal for systems
        regenerated from the same seed and specification
        """
        payload = json.dumps(self.to_dict(include_timestamp=False), sort_keys=True)
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()
