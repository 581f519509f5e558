"""Fill orbit slots with planets."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, List, Sequence, Tuple

import numpy as np

from exoforge.architecture.host import OrbitHost, Zone
from exoforge.architecture.slots import OrbitSlot
from exoforge.generators.contracts import ParentContext, PlanetSpec
from exoforge.util.rng import fork, weighted_index

logger = logging.getLogger(__name__)


class PlanetArchetype(Enum):
    ROCKY = "rocky"
    SUPER_EARTH = "super_earth"
    MINI_NEPTUNE = "mini_neptune"
    ICE_GIANT = "ice_giant"
    GAS_GIANT = "gas_giant"


ZONE_ARCHETYPE_WEIGHTS: Dict[Zone, Dict[PlanetArchetype, float]] = {
    Zone.HOT: {
        PlanetArchetype.ROCKY: 0.45,
        PlanetArchetype.SUPER_EARTH: 0.35,
        PlanetArchetype.MINI_NEPTUNE: 0.15,
        PlanetArchetype.ICE_GIANT: 0.0,
        PlanetArchetype.GAS_GIANT: 0.05,
    },
    Zone.TEMPERATE: {
        PlanetArchetype.ROCKY: 0.35,
        PlanetArchetype.SUPER_EARTH: 0.30,
        PlanetArchetype.MINI_NEPTUNE: 0.15,
        PlanetArchetype.ICE_GIANT: 0.05,
        PlanetArchetype.GAS_GIANT: 0.15,
    },
    Zone.COLD: {
        PlanetArchetype.ROCKY: 0.15,
        PlanetArchetype.SUPER_EARTH: 0.10,
        PlanetArchetype.MINI_NEPTUNE: 0.20,
        PlanetArchetype.ICE_GIANT: 0.25,
        PlanetArchetype.GAS_GIANT: 0.30,
    },
}
# Upper bound of the random bonus used to rank slots in targeted mode
TARGETED_JITTER = 0.25


def planet_id(host_id: str, slot: OrbitSlot) -> str:
    return f"planet-{host_id}-{slot.index}"


def choose_archetype(zone: Zone, rng: np.random.Generator) -> PlanetArchetype:
    table = ZONE_ARCHETYPE_WEIGHTS[zone]
    archetypes = list(table)
    return archetypes[weighted_index(rng, [table[a] for a in archetypes])]


def host_context(host: OrbitHost, age_gyr: float, metallicity: float) -> ParentContext:
    return ParentContext(
        stellar_mass=host.mass_msun,
        stellar_luminosity=host.luminosity_lsun,
        stellar_temperature=host.temperature_k,
        age_gyr=age_gyr,
        metallicity=metallicity,
    )


def place_planet(
    host: OrbitHost,
    slot: OrbitSlot,
    context: ParentContext,
    rng: np.random.Generator,
    generator,
):
    """
    Generate a planet for ``slot`` and mark the slot filled. The generator
    gets the slot's distance and eccentricity as overrides, so the body's
    orbit is the slot's orbit.
    """
    archetype = choose_archetype(slot.zone, rng)
    spec = PlanetSpec(
        body_id=planet_id(host.node_id, slot),
        overrides={"semi_major_axis": slot.a_au, "eccentricity": slot.eccentricity},
        archetype=archetype.value,
        host_id=host.node_id,
        slot_index=slot.index,
    )
    planet = generator.generate(spec, context.at(slot.a_au), fork(rng))
    planet.zone = slot.zone
    slot.fill(planet.id)
    return planet


def place_planets(
    host: OrbitHost,
    slots: Sequence[OrbitSlot],
    context: ParentContext,
    rng: np.random.Generator,
    generator,
) -> List:
    """
    Roll every available slot of a host against its fill probability
    Args:
        host (OrbitHost):
            Host the slots belong to
        slots (list of OrbitSlot):
            The host's slots, filled in place
        context (ParentContext):
            Stellar context for the planet generator
        rng (numpy Generator):
            Generator for this host
        generator (PlanetGenerator):
            Leaf planet generator
    Returns:
        list: planets, ordered by slot
    """
    planets = []
    for slot in slots:
        if slot.available and rng.random() < slot.fill_probability:
            planets.append(place_planet(host, slot, context, rng, generator))
    logger.debug(
        "Host %s: %d of %d slot(s) filled", host.node_id, len(planets), len(slots)
    )
    return planets


def place_planets_targeted(
    entries: Sequence[Tuple[OrbitHost, Sequence[OrbitSlot], ParentContext]],
    planet_count: int,
    rng: np.random.Generator,
    generator,
) -> List:
    """
    Fill exactly ``planet_count`` slots across all hosts, or every available
    slot if there are fewer. Slots are ranked by fill probability plus a
    random bonus, so likely slots win but the order is not fixed.
    Returns:
        list: planets, grouped by host and ordered by slot
    """
    candidates = []
    for position, (host, slots, context) in enumerate(entries):
        for slot in slots:
            if slot.available:
                score = slot.fill_probability + rng.uniform(0, TARGETED_JITTER)
                candidates.append((score, position, slot))
    ranked = sorted(candidates, key=lambda c: -c[0])[: max(0, planet_count)]
    chosen = sorted(ranked, key=lambda c: (c[1], c[2].index))

    planets = []
    for _, position, slot in chosen:
        host, _, context = entries[position]
        planets.append(place_planet(host, slot, context, rng, generator))
    if len(planets) < planet_count:
        logger.debug(
            "Requested %d planet(s), only %d slot(s) available", planet_count, len(planets)
        )
    return planets
