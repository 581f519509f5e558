"""System generation pipeline.

A system is a pure function of its specification and seed. The stages run
in a fixed order, stars, hierarchy, orbit hosts, slots, planets, moons and
belts, each consuming the complete output of the one before. One generator
is threaded through the stages and every independent unit of work (a host,
a planet's moons, a body) gets its own generator forked from it.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from astropy.time import Time

from exoforge.architecture.hierarchy import GenerationError
from exoforge.architecture.slots import generate_slots
from exoforge.architecture.stellar import build_stellar_configuration
from exoforge.base.system import GENERATOR_VERSION, SCHEMA_VERSION, Provenance, System
from exoforge.config import DEFAULT_AGE_RANGE_GYR, DEFAULT_METALLICITY_SIGMA, GenerationSpec
from exoforge.generators import Generators
from exoforge.placement.belts import place_belts
from exoforge.placement.moons import place_moons
from exoforge.placement.planets import host_context, place_planets, place_planets_targeted
from exoforge.util.rng import fork, make_rng

logger = logging.getLogger(__name__)


def _system_age(spec: GenerationSpec, rng: np.random.Generator) -> float:
    age = spec.override("age_gyr", spec.age_gyr)
    if age is None:
        age = rng.uniform(*DEFAULT_AGE_RANGE_GYR)
    return float(age)


def _system_metallicity(spec: GenerationSpec, rng: np.random.Generator) -> float:
    metallicity = spec.override("metallicity", spec.metallicity)
    if metallicity is None:
        metallicity = rng.normal(0.0, DEFAULT_METALLICITY_SIGMA)
    return float(metallicity)


def generate_system(
    spec: GenerationSpec,
    rng: Optional[np.random.Generator] = None,
    generators: Optional[Generators] = None,
) -> System:
    """
    Generate one system
    Args:
        spec (GenerationSpec):
            What to generate
        rng (numpy Generator):
            Source of randomness, defaults to a generator seeded with
            spec.seed. Only the default makes the result reproducible from
            the recorded provenance alone.
        generators (Generators):
            Leaf generators for stars, planets, moons and asteroids
    Returns:
        System: the generated system
    Raises:
        GenerationError: if no stars or no valid hierarchy could be built
    """
    if rng is None:
        rng = make_rng(spec.seed)
    if generators is None:
        generators = Generators()

    age_gyr = _system_age(spec, rng)
    metallicity = _system_metallicity(spec, rng)

    stellar = build_stellar_configuration(
        fork(rng),
        generators.star,
        min_stars=spec.min_stars,
        max_stars=spec.max_stars,
        hints=spec.spectral_classes,
        age_gyr=age_gyr,
        metallicity=metallicity,
        star_count=spec.star_count,
        star_overrides=spec.star_overrides(),
    )
    if not stellar.stars:
        raise GenerationError(f"Seed {spec.seed} produced no stars")
    hosts = stellar.hosts
    contexts = {host.node_id: host_context(host, age_gyr, metallicity) for host in hosts}

    slots = {host.node_id: generate_slots(host, fork(rng)) for host in hosts}

    planet_count = spec.target_planet_count
    if planet_count is None:
        planets = []
        for host in hosts:
            planets.extend(
                place_planets(
                    host, slots[host.node_id], contexts[host.node_id], fork(rng), generators.planet
                )
            )
    else:
        entries = [(host, slots[host.node_id], contexts[host.node_id]) for host in hosts]
        planets = place_planets_targeted(entries, planet_count, fork(rng), generators.planet)

    moons = []
    for planet in planets:
        moons.extend(place_moons(planet, contexts[planet.host_id], fork(rng), generators.moon))

    belts, asteroids = [], []
    if spec.include_belts:
        for host in hosts:
            host_belts, host_asteroids = place_belts(
                host, slots[host.node_id], contexts[host.node_id], fork(rng), generators.asteroid
            )
            belts.extend(host_belts)
            asteroids.extend(host_asteroids)

    provenance = Provenance(
        seed=spec.seed,
        generator_version=GENERATOR_VERSION,
        schema_version=SCHEMA_VERSION,
        timestamp=Time.now().isot,
        specification=spec.snapshot(),
    )
    system = System(
        bodies=[*stellar.stars, *planets, *moons, *asteroids],
        hierarchy=stellar.hierarchy,
        hosts=hosts,
        slots=slots,
        belts=belts,
        provenance=provenance,
    )
    logger.info(
        "Seed %d: %d star(s), %d host(s), %d planet(s), %d moon(s), %d belt(s)",
        spec.seed,
        len(system.star_ids),
        len(hosts),
        len(system.planet_ids),
        len(system.moon_ids),
        len(belts),
    )
    return system
