"""Orbit hosts: the star or barycenter a family of orbits is laid out around."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

import exoforge.util.mechanics as mech
from exoforge.architecture.hierarchy import HierarchyNode, StellarHierarchy

logger = logging.getLogger(__name__)

# Closest S-type orbit in stellar radii
INNER_RADIUS_FACTOR = 3.0


class HostType(Enum):
    S_TYPE = "s_type"  # circumstellar
    P_TYPE = "p_type"  # circumbinary


class Zone(Enum):
    HOT = "hot"
    TEMPERATE = "temperate"
    COLD = "cold"


@dataclass
class OrbitHost:
    """
    Stability region and temperature zones around one hierarchy node. Masses
    are in Msun, luminosities in Lsun, distances in AU.
    """

    node_id: str
    host_type: HostType
    star_ids: List[str]
    mass_msun: float
    luminosity_lsun: float
    temperature_k: float
    star_radius_au: float
    inner_stable_au: float
    outer_stable_au: float
    hz_inner_au: float = 0.0
    hz_outer_au: float = 0.0
    frost_line_au: float = 0.0
    companions: List["Companion"] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.hz_inner_au, self.hz_outer_au = mech.habitable_zone(self.luminosity_lsun)
        self.frost_line_au = mech.frost_line(self.luminosity_lsun)

    @property
    def has_valid_zone(self) -> bool:
        return self.outer_stable_au > self.inner_stable_au > 0

    def zone_of(self, a_au: float) -> Zone:
        if a_au < self.hz_inner_au:
            return Zone.HOT
        if a_au < self.frost_line_au:
            return Zone.TEMPERATE
        return Zone.COLD

    def to_dict(self) -> dict:
        return {
            "node_id": self.node_id,
            "host_type": self.host_type.value,
            "star_ids": list(self.star_ids),
            "mass_msun": self.mass_msun,
            "luminosity_lsun": self.luminosity_lsun,
            "temperature_k": self.temperature_k,
            "inner_stable_au": self.inner_stable_au,
            "outer_stable_au": self.outer_stable_au,
            "hz_inner_au": self.hz_inner_au,
            "hz_outer_au": self.hz_outer_au,
            "frost_line_au": self.frost_line_au,
        }


@dataclass(frozen=True)
class Companion:
    """A perturbing body outside a host, seen from that host."""

    mass_msun: float
    separation_au: float


def _aggregate(stars: Sequence) -> Dict[str, float]:
    mass = sum(star.mass_msun for star in stars)
    luminosity = sum(star.luminosity_lsun for star in stars)
    if luminosity > 0:
        temperature = (
            sum(star.temperature_k * star.luminosity_lsun for star in stars) / luminosity
        )
    else:
        temperature = 0.0
    return {
        "mass_msun": mass,
        "luminosity_lsun": luminosity,
        "temperature_k": temperature,
        "star_radius_au": max(star.radius_au for star in stars),
    }


def compute_orbit_host(
    node: HierarchyNode, hierarchy: StellarHierarchy, stars_by_id: Dict
) -> OrbitHost:
    """
    Build the host for one hierarchy node. The result may not have a valid
    zone, check OrbitHost.has_valid_zone.
    """
    star_ids = hierarchy.leaf_ids(node)
    totals = _aggregate([stars_by_id[star_id] for star_id in star_ids])

    if node.is_barycenter:
        host_type = HostType.P_TYPE
        primary_mass = sum(stars_by_id[s].mass_msun for s in hierarchy.leaf_ids(node.primary))
        secondary_mass = sum(
            stars_by_id[s].mass_msun for s in hierarchy.leaf_ids(node.secondary)
        )
        inner = mech.p_type_critical_radius(
            node.separation_au,
            mech.mass_ratio(max(primary_mass, secondary_mass), min(primary_mass, secondary_mass)),
            node.eccentricity,
        )
    else:
        host_type = HostType.S_TYPE
        inner = INNER_RADIUS_FACTOR * totals["star_radius_au"]

    parent = hierarchy.parent_of(node.id)
    companions = []
    if parent is not None:
        sibling = hierarchy.sibling_of(node.id)
        sibling_mass = sum(stars_by_id[s].mass_msun for s in hierarchy.leaf_ids(sibling))
        outer = mech.s_type_critical_radius(
            parent.separation_au,
            mech.mass_ratio(totals["mass_msun"], sibling_mass),
            parent.eccentricity,
        )
        companions.append(Companion(sibling_mass, parent.separation_au))
    else:
        outer = mech.outer_region_limit(totals["mass_msun"])

    return OrbitHost(
        node_id=node.id,
        host_type=host_type,
        star_ids=star_ids,
        inner_stable_au=inner,
        outer_stable_au=outer,
        companions=companions,
        **totals,
    )


def build_orbit_hosts(hierarchy: StellarHierarchy, stars_by_id: Dict) -> List[OrbitHost]:
    """
    One host per hierarchy node, pre-order. Hosts without a valid zone are
    dropped.
    """
    hosts = []
    for node in hierarchy.flatten():
        host = compute_orbit_host(node, hierarchy, stars_by_id)
        if not host.has_valid_zone:
            logger.debug(
                "Dropping %s host %s: inner %.4g AU, outer %.4g AU",
                host.host_type.value,
                host.node_id,
                host.inner_stable_au,
                host.outer_stable_au,
            )
            continue
        hosts.append(host)
    return hosts


def find_host(hosts: Sequence[OrbitHost], node_id: str) -> Optional[OrbitHost]:
    for host in hosts:
        if host.node_id == node_id:
            return host
    return None
