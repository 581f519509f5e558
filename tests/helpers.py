"""Shared builders for the test suite."""
from __future__ import annotations

from exoforge.architecture.hierarchy import BarycenterNode, StarNode, StellarHierarchy
from exoforge.architecture.host import build_orbit_hosts
from exoforge.generators import ArchetypePlanetGenerator, MainSequenceStarGenerator
from exoforge.generators.contracts import ParentContext, PlanetSpec, StarSpec
from exoforge.util.mechanics import orbital_period
from exoforge.util.rng import make_rng


def make_star(index: int, mass: float, spectral_class: str = "G"):
    spec = StarSpec(
        body_id=f"star-{index}",
        overrides={"mass": mass},
        spectral_class=spectral_class,
    )
    return MainSequenceStarGenerator().generate(spec, make_rng(index))


def single_star_host(mass: float = 1.0):
    star = make_star(0, mass)
    hierarchy = StellarHierarchy(StarNode(id=star.id, star_id=star.id))
    return build_orbit_hosts(hierarchy, {star.id: star})[0]


def binary(primary_mass: float, secondary_mass: float, separation_au: float, eccentricity=0.0):
    stars = [make_star(0, primary_mass), make_star(1, secondary_mass, "K")]
    root = BarycenterNode(
        id="bary-0",
        primary=StarNode(id="star-0", star_id="star-0"),
        secondary=StarNode(id="star-1", star_id="star-1"),
        separation_au=separation_au,
        eccentricity=eccentricity,
        period_yr=orbital_period(separation_au, primary_mass + secondary_mass),
    )
    return stars, StellarHierarchy(root)


def sun_context() -> ParentContext:
    return ParentContext(
        stellar_mass=1.0,
        stellar_luminosity=1.0,
        stellar_temperature=5772.0,
        age_gyr=4.6,
        metallicity=0.0,
    )


def jupiter():
    spec = PlanetSpec(
        body_id="planet-star-0-4",
        overrides={"semi_major_axis": 5.2, "eccentricity": 0.05, "mass": 317.8},
        archetype="gas_giant",
        host_id="star-0",
        slot_index=4,
    )
    return ArchetypePlanetGenerator().generate(spec, sun_context(), make_rng(0))
