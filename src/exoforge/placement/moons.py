"""Moons of placed planets.

Moons live between the planet's Roche limit (or twice its radius, whichever
is further out) and a fraction of its Hill sphere: half of it for regular
moons, 70% for captured ones.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

import astropy.units as u
import numpy as np

import exoforge.util.mechanics as mech
from exoforge.architecture.host import Zone
from exoforge.generators.contracts import MoonSpec, ParentContext
from exoforge.generators.moon import moon_density
from exoforge.util.rng import fork

logger = logging.getLogger(__name__)

ROCHE_MARGIN = 1.5
RADIUS_MARGIN = 2.0
REGULAR_HILL_FRACTION = 0.5
CAPTURED_HILL_FRACTION = 0.7
# Neighbouring moons keep at least this distance ratio
MIN_MOON_SPACING = 1.2
MAX_ATTEMPTS = 8


@dataclass(frozen=True)
class MoonCategory:
    name: str
    max_mass_mearth: float
    probability: float
    count_range: Tuple[int, int]
    captured_fraction: float


MOON_CATEGORIES = (
    MoonCategory("dwarf", 0.5, 0.2, (1, 1), 0.0),
    MoonCategory("terrestrial", 10.0, 0.45, (1, 2), 0.1),
    MoonCategory("neptunian", 50.0, 0.85, (1, 6), 0.4),
    MoonCategory("jovian", np.inf, 0.95, (2, 10), 0.5),
)


def moon_category(mass_mearth: float) -> MoonCategory:
    for category in MOON_CATEGORIES:
        if mass_mearth < category.max_mass_mearth:
            return category
    return MOON_CATEGORIES[-1]


def moon_band(planet, satellite_density: float, hill_fraction: float) -> Tuple[float, float]:
    """
    Allowed semi-major axis range [AU] for a moon of ``planet``; the range
    is empty (upper <= lower) when no moon fits
    """
    radius_au = planet.radius.to_value(u.AU)
    roche = mech.roche_limit(radius_au, planet.density, satellite_density)
    lower = max(ROCHE_MARGIN * roche, RADIUS_MARGIN * radius_au)
    upper = hill_fraction * planet.hill_radius.to_value(u.AU)
    return lower, upper


def _clear_of(a_au: float, placed: List[float]) -> bool:
    return all(
        max(a_au, other) / min(a_au, other) >= MIN_MOON_SPACING for other in placed
    )


def place_moons(planet, context: ParentContext, rng: np.random.Generator, generator) -> List:
    """
    Generate the moons of one planet and record their ids on it
    Args:
        planet (Planet):
            A placed planet
        context (ParentContext):
            Stellar context of the planet's host
        rng (numpy Generator):
            Generator for this planet's moons
        generator (MoonGenerator):
            Leaf moon generator
    Returns:
        list: moons, innermost first
    """
    mass_mearth = planet.mass.to_value(u.M_earth)
    category = moon_category(mass_mearth)
    if rng.random() >= category.probability:
        return []
    count = int(rng.integers(category.count_range[0], category.count_range[1] + 1))

    icy = getattr(planet, "zone", None) is Zone.COLD
    density = moon_density(icy)
    regular_band = moon_band(planet, density, REGULAR_HILL_FRACTION)
    if not regular_band[1] > regular_band[0] > 0:
        logger.debug("Planet %s has no room for moons", planet.id)
        return []
    captured_band = moon_band(planet, density, CAPTURED_HILL_FRACTION)

    moon_context = context.at(planet.a.to_value(u.AU)).around(
        mass_mearth, planet.radius.to_value(u.R_earth)
    )
    placed: List[float] = []
    moons = []
    for k in range(count):
        captured = bool(rng.random() < category.captured_fraction)
        lower, upper = captured_band if captured else regular_band
        a = None
        for _ in range(MAX_ATTEMPTS):
            candidate = mech.log_uniform(rng, lower, upper)
            if _clear_of(candidate, placed):
                a = candidate
                break
        if a is None:
            continue
        placed.append(a)
        spec = MoonSpec(
            body_id=f"{planet.id}-moon-{k}",
            overrides={"semi_major_axis": a},
            parent_id=planet.id,
            captured=captured,
            icy=icy,
        )
        moons.append(generator.generate(spec, moon_context, fork(rng)))

    moons.sort(key=lambda moon: moon.a)
    planet.moon_ids = [moon.id for moon in moons]
    return moons
