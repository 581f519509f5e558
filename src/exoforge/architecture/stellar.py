"""Stellar configuration: how many stars, which stars, and how they pair up."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np

import exoforge.util.mechanics as mech
from exoforge.architecture.hierarchy import (
    BarycenterNode,
    GenerationError,
    HierarchyNode,
    StarNode,
    StellarHierarchy,
)
from exoforge.architecture.host import OrbitHost, build_orbit_hosts
from exoforge.generators.contracts import StarSpec
from exoforge.util.rng import fork, weighted_index

logger = logging.getLogger(__name__)

# Field multiplicity fractions by star count, 4 or more share HIGHER_ORDER_WEIGHT
HIGHER_ORDER_WEIGHT = 0.05
MULTIPLICITY_WEIGHTS = {
    1: 0.54,
    2: 0.33,
    3: 0.08,
    4: HIGHER_ORDER_WEIGHT / 3,
    5: HIGHER_ORDER_WEIGHT / 3,
    6: HIGHER_ORDER_WEIGHT / 3,
}


@dataclass(frozen=True)
class SeparationCategory:
    name: str
    weight: float
    range_au: tuple
    max_eccentricity: float


SEPARATION_CATEGORIES = (
    SeparationCategory("close", 0.30, (0.05, 1.0), 0.3),
    SeparationCategory("moderate", 0.45, (1.0, 50.0), 0.6),
    SeparationCategory("wide", 0.25, (50.0, 2000.0), 0.8),
)
# Outer pair separation over the widest inner pair
HIERARCHICAL_WIDENING = 3.0


@dataclass
class StellarConfiguration:
    stars: list
    hierarchy: StellarHierarchy
    hosts: List[OrbitHost]

    @property
    def stars_by_id(self) -> Dict:
        return {star.id: star for star in self.stars}


def choose_star_count(
    rng: np.random.Generator,
    min_stars: int,
    max_stars: int,
    hints: Optional[Sequence[str]] = None,
) -> int:
    """
    Number of stars in the system. Spectral hints fix the count (clipped to
    the allowed range); otherwise it is drawn from field multiplicity.
    """
    if hints:
        return int(np.clip(len(hints), min_stars, max_stars))
    counts = [n for n in range(min_stars, max_stars + 1)]
    weights = [MULTIPLICITY_WEIGHTS.get(n, MULTIPLICITY_WEIGHTS[6]) for n in counts]
    return counts[weighted_index(rng, weights)]


def generate_stars(
    count: int,
    rng: np.random.Generator,
    generator,
    hints: Optional[Sequence[str]] = None,
    age_gyr: float = 4.6,
    metallicity: float = 0.0,
    star_overrides: Optional[Dict[int, Dict]] = None,
) -> list:
    """
    Generate ``count`` stars, each from its own forked generator
    """
    hints = list(hints or [])
    star_overrides = star_overrides or {}
    stars = []
    for i in range(count):
        spec = StarSpec(
            body_id=f"star-{i}",
            overrides=dict(star_overrides.get(i, {})),
            spectral_class=hints[i] if i < len(hints) else None,
            age_gyr=age_gyr,
            metallicity=metallicity,
        )
        stars.append(generator.generate(spec, fork(rng)))
    if not stars:
        raise GenerationError("No stars were generated")
    return stars


def _pair_mass(node: HierarchyNode, stars_by_id: Dict) -> float:
    if node.is_barycenter:
        return _pair_mass(node.primary, stars_by_id) + _pair_mass(node.secondary, stars_by_id)
    return stars_by_id[node.star_id].mass_msun


def draw_separation(rng: np.random.Generator, floor_au: float = 0.0):
    """
    Separation [AU] and eccentricity of a new pair. A positive floor_au
    widens the draw so the pair can host its inner pairs.
    """
    category = SEPARATION_CATEGORIES[
        weighted_index(rng, [c.weight for c in SEPARATION_CATEGORIES])
    ]
    low, high = category.range_au
    separation = mech.log_uniform(rng, low, high)
    if separation < floor_au:
        separation = floor_au * mech.log_uniform(rng, 1.0, high / low)
    eccentricity = rng.random() ** 2 * category.max_eccentricity
    return separation, float(eccentricity)


def build_hierarchy(stars: Sequence, rng: np.random.Generator) -> StellarHierarchy:
    """
    Pair nodes at random until one root remains, N - 1 pairings for N stars
    """
    if not stars:
        raise GenerationError("Cannot build a hierarchy without stars")
    stars_by_id = {star.id: star for star in stars}
    nodes: List[HierarchyNode] = [StarNode(id=star.id, star_id=star.id) for star in stars]
    n_barycenters = 0
    while len(nodes) > 1:
        i, j = sorted(int(k) for k in rng.choice(len(nodes), size=2, replace=False))
        second = nodes.pop(j)
        first = nodes.pop(i)
        # The more massive side is the primary
        if _pair_mass(second, stars_by_id) > _pair_mass(first, stars_by_id):
            first, second = second, first

        inner = [n.separation_au for n in (first, second) if n.is_barycenter]
        floor = HIERARCHICAL_WIDENING * max(inner) if inner else 0.0
        separation, eccentricity = draw_separation(rng, floor)
        total_mass = _pair_mass(first, stars_by_id) + _pair_mass(second, stars_by_id)
        nodes.append(
            BarycenterNode(
                id=f"bary-{n_barycenters}",
                primary=first,
                secondary=second,
                separation_au=separation,
                eccentricity=eccentricity,
                period_yr=mech.orbital_period(separation, total_mass),
            )
        )
        n_barycenters += 1
    return StellarHierarchy(nodes[0])


def build_stellar_configuration(
    rng: np.random.Generator,
    generator,
    min_stars: int = 1,
    max_stars: int = 1,
    hints: Optional[Sequence[str]] = None,
    age_gyr: float = 4.6,
    metallicity: float = 0.0,
    star_count: Optional[int] = None,
    star_overrides: Optional[Dict[int, Dict]] = None,
) -> StellarConfiguration:
    """
    Stars, their hierarchy, and every usable orbit host
    """
    if star_count is None:
        star_count = choose_star_count(rng, min_stars, max_stars, hints)
    stars = generate_stars(
        star_count,
        rng,
        generator,
        hints=hints,
        age_gyr=age_gyr,
        metallicity=metallicity,
        star_overrides=star_overrides,
    )
    hierarchy = build_hierarchy(stars, rng)
    stars_by_id = {star.id: star for star in stars}
    hosts = build_orbit_hosts(hierarchy, stars_by_id)
    logger.debug(
        "Built %d star(s), %d usable host(s) of %d nodes",
        len(stars),
        len(hosts),
        len(hierarchy),
    )
    return StellarConfiguration(stars=stars, hierarchy=hierarchy, hosts=hosts)
