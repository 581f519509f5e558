"""Asteroid belts in the gaps between planets.

Each host may get an inner belt near its frost line and an outer belt well
beyond it. A belt goes into the free gap that best trades off width against
closeness to its target distance; belts placed earlier count as occupied
space for later ones.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

import exoforge.util.mechanics as mech
from exoforge.architecture.host import OrbitHost
from exoforge.architecture.slots import OrbitSlot
from exoforge.base.asteroid import (
    AsteroidBelt,
    AsteroidComposition,
    BeltComposition,
    BeltKind,
)
from exoforge.generators.contracts import AsteroidSpec, ParentContext
from exoforge.util.rng import fork, weighted_index

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BeltProfile:
    kind: BeltKind
    probability: float
    # Relative width of the belt, width / center
    relative_width: float
    # Smallest usable gap as a fraction of the target distance
    min_gap_fraction: float
    # Belt mass per AU of width [Mearth / AU]
    mass_per_au: Tuple[float, float]
    # Major asteroid diameters [km]
    diameter_km: Tuple[float, float]
    compositions: Dict[BeltComposition, float]
    # Belt stays beyond this multiple of the frost line
    min_frost_multiple: float = 0.0


OUTER_BELT_FROST_MULTIPLE = 5.0
OUTER_BELT_SPREAD = (1.0, 3.0)

BELT_PROFILES = {
    BeltKind.INNER: BeltProfile(
        kind=BeltKind.INNER,
        probability=0.45,
        relative_width=0.4,
        min_gap_fraction=0.15,
        mass_per_au=(1e-4, 5e-3),
        diameter_km=(100.0, 1000.0),
        compositions={BeltComposition.ROCKY: 0.7, BeltComposition.METALLIC: 0.3},
    ),
    BeltKind.OUTER: BeltProfile(
        kind=BeltKind.OUTER,
        probability=0.55,
        relative_width=0.5,
        min_gap_fraction=0.25,
        mass_per_au=(1e-3, 2e-2),
        diameter_km=(200.0, 2500.0),
        compositions={BeltComposition.ICY: 1.0},
        min_frost_multiple=OUTER_BELT_FROST_MULTIPLE,
    ),
}

BELT_ASTEROID_COMPOSITION = {
    BeltComposition.ROCKY: {
        AsteroidComposition.CARBONACEOUS: 0.6,
        AsteroidComposition.SILICATE: 0.3,
        AsteroidComposition.METALLIC: 0.1,
    },
    BeltComposition.METALLIC: {
        AsteroidComposition.METALLIC: 0.5,
        AsteroidComposition.SILICATE: 0.35,
        AsteroidComposition.CARBONACEOUS: 0.15,
    },
    BeltComposition.ICY: {
        AsteroidComposition.ICY: 0.8,
        AsteroidComposition.CARBONACEOUS: 0.2,
    },
}

# Free space kept between a belt edge and a neighbouring planet or belt
CLEARANCE = 0.1
MAJOR_ASTEROID_COUNT = (3, 10)
SIZE_DISTRIBUTION_INDEX = 2.5


@dataclass(frozen=True)
class Gap:
    lower: float
    upper: float
    # Whether each edge is an occupied orbit rather than a stability limit
    lower_occupied: bool
    upper_occupied: bool

    @property
    def width(self) -> float:
        return self.upper - self.lower

    @property
    def center(self) -> float:
        return 0.5 * (self.lower + self.upper)

    def score(self, target: float) -> float:
        return self.width / (1 + abs(self.center - target) / target)


def find_gap(
    occupied: Sequence[Tuple[float, float]],
    lower: float,
    upper: float,
    target: float,
    min_width: float,
) -> Optional[Gap]:
    """
    Best free gap for a belt aimed at ``target``
    Args:
        occupied (list of (float, float)):
            Occupied intervals [AU]; a planet is a zero-width interval
        lower, upper (float):
            Search bounds, the stability limits of the host or tighter [AU]
        target (float):
            Preferred belt distance [AU]
        min_width (float):
            Narrowest acceptable gap [AU]
    Returns:
        Gap or None: the highest scoring gap, None if it is narrower than
        min_width or there is no gap at all
    """
    if not upper > lower or target <= 0:
        return None
    edges = sorted((lo, hi) for lo, hi in occupied if hi >= lower and lo <= upper)
    gaps = []
    cursor, cursor_occupied = lower, False
    for lo, hi in edges:
        if lo > cursor:
            gaps.append(Gap(cursor, lo, cursor_occupied, True))
        if hi >= cursor:
            cursor, cursor_occupied = hi, True
    if upper > cursor:
        gaps.append(Gap(cursor, upper, cursor_occupied, False))
    if not gaps:
        return None
    best = max(gaps, key=lambda gap: gap.score(target))
    if best.width < min_width:
        return None
    return best


def belt_extent(gap: Gap, target: float, relative_width: float) -> Tuple[float, float]:
    """
    Inner and outer belt radius inside ``gap``, kept CLEARANCE away from any
    occupied edge and centered as close to ``target`` as the gap allows
    """
    lower = gap.lower * (1 + CLEARANCE) if gap.lower_occupied else gap.lower
    upper = gap.upper / (1 + CLEARANCE) if gap.upper_occupied else gap.upper
    if not upper > lower:
        return 0.0, 0.0
    width = min(upper - lower, relative_width * target)
    center = float(np.clip(target, lower + width / 2, upper - width / 2))
    return center - width / 2, center + width / 2


def sample_diameters(
    rng: np.random.Generator, count: int, d_min: float, d_max: float
) -> List[float]:
    """
    Diameters from a power law truncated to [d_min, d_max] with cumulative
    count N(>D) ~ D^-SIZE_DISTRIBUTION_INDEX, largest first
    """
    q = SIZE_DISTRIBUTION_INDEX
    tail = 1 - (d_min / d_max) ** q
    draws = rng.random(count)
    diameters = d_min * (1 - draws * tail) ** (-1 / q)
    return sorted((float(d) for d in diameters), reverse=True)


def belt_target(kind: BeltKind, host: OrbitHost, rng: np.random.Generator) -> float:
    if kind is BeltKind.INNER:
        return host.frost_line_au
    return host.frost_line_au * OUTER_BELT_FROST_MULTIPLE * rng.uniform(*OUTER_BELT_SPREAD)


def place_belt(
    kind: BeltKind,
    host: OrbitHost,
    occupied: Sequence[Tuple[float, float]],
    context: ParentContext,
    rng: np.random.Generator,
    generator,
):
    """
    Try to place one belt of ``kind``
    Returns:
        (AsteroidBelt, list of Asteroid) or None if there is no usable gap
    """
    profile = BELT_PROFILES[kind]
    target = belt_target(kind, host, rng)
    if not host.inner_stable_au < target < host.outer_stable_au:
        logger.debug("No %s belt for %s, target %.3g AU out of range", kind.value, host.node_id, target)
        return None
    lower = max(host.inner_stable_au, profile.min_frost_multiple * host.frost_line_au)
    gap = find_gap(
        occupied,
        lower,
        host.outer_stable_au,
        target,
        profile.min_gap_fraction * target,
    )
    if gap is None:
        logger.debug("No %s belt for %s, no gap near %.3g AU", kind.value, host.node_id, target)
        return None
    inner, outer = belt_extent(gap, target, profile.relative_width)
    if not outer > inner > 0:
        return None

    compositions = list(profile.compositions)
    composition = compositions[
        weighted_index(rng, [profile.compositions[c] for c in compositions])
    ]
    width = outer - inner
    mass = mech.log_uniform(rng, *profile.mass_per_au) * width
    belt = AsteroidBelt(
        id=f"belt-{host.node_id}-{kind.value}",
        host_id=host.node_id,
        kind=kind,
        composition=composition,
        inner_au=inner,
        outer_au=outer,
        mass_mearth=mass,
    )

    count = int(rng.integers(MAJOR_ASTEROID_COUNT[0], MAJOR_ASTEROID_COUNT[1] + 1))
    count = min(count, AsteroidBelt.MAX_MAJOR_ASTEROIDS)
    diameters = sample_diameters(rng, count, *profile.diameter_km)
    table = BELT_ASTEROID_COMPOSITION[composition]
    kinds = list(table)
    asteroids = []
    for k, diameter in enumerate(diameters):
        asteroid_composition = kinds[weighted_index(rng, [table[c] for c in kinds])]
        a = rng.uniform(inner, outer)
        spec = AsteroidSpec(
            body_id=f"{belt.id}-{k}",
            overrides={"semi_major_axis": a, "diameter": diameter},
            belt_id=belt.id,
            composition=asteroid_composition.value,
        )
        asteroids.append(generator.generate(spec, context.at(a), fork(rng)))
    belt.asteroid_ids = [asteroid.id for asteroid in asteroids]
    return belt, asteroids


def place_belts(
    host: OrbitHost,
    slots: Sequence[OrbitSlot],
    context: ParentContext,
    rng: np.random.Generator,
    generator,
):
    """
    Roll and place the inner and outer belts of one host
    Returns:
        (list of AsteroidBelt, list of Asteroid)
    """
    occupied = [(slot.a_au, slot.a_au) for slot in slots if slot.filled]
    belts, asteroids = [], []
    for kind in (BeltKind.INNER, BeltKind.OUTER):
        if rng.random() >= BELT_PROFILES[kind].probability:
            continue
        placed = place_belt(kind, host, occupied, context, fork(rng), generator)
        if placed is None:
            continue
        belt, belt_asteroids = placed
        occupied.append((belt.inner_au, belt.outer_au))
        belts.append(belt)
        asteroids.extend(belt_asteroids)
    return belts, asteroids
