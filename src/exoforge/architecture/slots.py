"""Candidate orbit slots around an orbit host.

Slots are laid out outward from the inner stability edge, each one a
resonant step from the last, until the outer stability edge is passed or
MAX_SLOTS is reached.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

import numpy as np

import exoforge.util.mechanics as mech
from exoforge.architecture.host import INNER_RADIUS_FACTOR, Companion, OrbitHost, Zone

START_MULTIPLIER = (1.05, 1.2)
# Period ratios between neighbouring slots
RESONANCE_RATIOS = (2 / 1, 3 / 2, 5 / 3, 7 / 5, 8 / 5, 5 / 4, 4 / 3)
RESONANCE_JITTER = 0.2
MIN_SPACING_FACTOR = 0.15
MAX_SLOTS = 20

FILL_DECAY_AU = 15.0
FILL_PROBABILITY_RANGE = (0.02, 1.0)

BASE_ECCENTRICITY = 0.05
ECCENTRICITY_GROWTH = 0.25


@dataclass
class OrbitSlot:
    host_id: str
    index: int
    a_au: float
    eccentricity: float
    zone: Zone
    stable: bool
    fill_probability: float
    body_id: Optional[str] = None

    @property
    def filled(self) -> bool:
        return self.body_id is not None

    @property
    def available(self) -> bool:
        return self.stable and not self.filled

    def fill(self, body_id: str) -> None:
        if self.filled:
            raise ValueError(
                f"Slot {self.index} of host {self.host_id} already holds {self.body_id}"
            )
        self.body_id = body_id

    def to_dict(self) -> dict:
        return {
            "host_id": self.host_id,
            "index": self.index,
            "a_au": self.a_au,
            "eccentricity": self.eccentricity,
            "zone": self.zone.value,
            "stable": self.stable,
            "fill_probability": self.fill_probability,
            "body_id": self.body_id,
        }


def fill_probability(a_au: float) -> float:
    """Chance a slot at a_au holds a planet, decaying outward."""
    low, high = FILL_PROBABILITY_RANGE
    return float(np.clip(np.exp(-a_au / FILL_DECAY_AU), low, high))


def suggested_eccentricity(host: OrbitHost, a_au: float, rng: np.random.Generator) -> float:
    span = host.outer_stable_au - host.inner_stable_au
    depth = np.clip((a_au - host.inner_stable_au) / span, 0.0, 1.0) if span > 0 else 0.0
    return float(rng.random() ** 2 * (BASE_ECCENTRICITY + ECCENTRICITY_GROWTH * depth))


def is_slot_stable(host: OrbitHost, a_au: float, companions: Iterable[Companion]) -> bool:
    return all(
        mech.is_stable_against_companion(
            a_au, host.mass_msun, companion.mass_msun, companion.separation_au
        )
        for companion in companions
    )


def next_slot_distance(a_au: float, rng: np.random.Generator) -> float:
    ratio = RESONANCE_RATIOS[int(rng.integers(len(RESONANCE_RATIOS)))]
    jitter = rng.uniform(-RESONANCE_JITTER, RESONANCE_JITTER)
    candidate = mech.resonant_distance(a_au, ratio, jitter)
    return max(candidate, a_au * (1 + MIN_SPACING_FACTOR))


def generate_slots(
    host: OrbitHost,
    rng: np.random.Generator,
    companions: Iterable[Companion] = (),
) -> List[OrbitSlot]:
    """
    Lay out the candidate slots of one host
    Args:
        host (OrbitHost):
            Host with a valid zone
        rng (numpy Generator):
            Generator for this host
        companions (iterable of Companion):
            Perturbers to test each slot against, none by default
    Returns:
        list of OrbitSlot:
            Slots ordered by increasing distance
    """
    companions = list(companions)
    slots: List[OrbitSlot] = []
    if not host.has_valid_zone:
        return slots

    start = max(host.inner_stable_au, INNER_RADIUS_FACTOR * host.star_radius_au)
    a = start * rng.uniform(*START_MULTIPLIER)
    while a <= host.outer_stable_au and len(slots) < MAX_SLOTS:
        slots.append(
            OrbitSlot(
                host_id=host.node_id,
                index=len(slots),
                a_au=a,
                eccentricity=suggested_eccentricity(host, a, rng),
                zone=host.zone_of(a),
                stable=is_slot_stable(host, a, companions),
                fill_probability=fill_probability(a),
            )
        )
        a = next_slot_distance(a, rng)
    return slots
