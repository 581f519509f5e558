"""Orbit slot layout."""
from __future__ import annotations

import pytest

import exoforge.util.mechanics as mech
from exoforge.architecture.host import Companion, build_orbit_hosts
from exoforge.architecture.slots import (
    MAX_SLOTS,
    MIN_SPACING_FACTOR,
    START_MULTIPLIER,
    fill_probability,
    generate_slots,
    next_slot_distance,
)
from exoforge.util.rng import make_rng

from helpers import binary, single_star_host


def test_slots_march_outward_with_minimum_spacing() -> None:
    host = single_star_host(1.0)
    for seed in range(25):
        slots = generate_slots(host, make_rng(seed))
        assert 0 < len(slots) <= MAX_SLOTS
        assert [slot.index for slot in slots] == list(range(len(slots)))
        start = max(host.inner_stable_au, 3.0 * host.star_radius_au)
        assert start * START_MULTIPLIER[0] <= slots[0].a_au <= start * START_MULTIPLIER[1]
        for inner, outer in zip(slots, slots[1:]):
            assert outer.a_au >= inner.a_au * (1 + MIN_SPACING_FACTOR) * (1 - 1e-12)
        assert all(slot.a_au <= host.outer_stable_au for slot in slots)
        probabilities = [slot.fill_probability for slot in slots]
        assert probabilities == sorted(probabilities, reverse=True)


def test_slot_properties_follow_the_host() -> None:
    host = single_star_host(1.0)
    for slot in generate_slots(host, make_rng(4)):
        assert slot.host_id == host.node_id
        assert slot.zone is host.zone_of(slot.a_au)
        assert slot.fill_probability == pytest.approx(fill_probability(slot.a_au))
        assert 0 <= slot.eccentricity < 0.3
        assert slot.stable and slot.available and not slot.filled


def test_next_slot_never_closer_than_minimum_spacing() -> None:
    rng = make_rng(8)
    for a in (0.05, 1.0, 30.0):
        for _ in range(100):
            assert next_slot_distance(a, rng) >= a * (1 + MIN_SPACING_FACTOR)


def test_fill_probability_decays_and_is_clamped() -> None:
    assert fill_probability(0.0) == pytest.approx(1.0)
    assert fill_probability(15.0) == pytest.approx(0.3679, rel=1e-3)
    assert fill_probability(1000.0) == pytest.approx(0.02)
    assert fill_probability(1.0) > fill_probability(5.0) > fill_probability(20.0)


def test_companions_mark_distant_slots_unstable() -> None:
    host = single_star_host(1.0)
    companion = Companion(mass_msun=1.0, separation_au=1.0)
    slots = generate_slots(host, make_rng(1), companions=[companion])
    assert slots
    for slot in slots:
        expected = mech.is_stable_against_companion(slot.a_au, host.mass_msun, 1.0, 1.0)
        assert slot.stable == expected
        assert slot.available == expected
    assert any(not slot.stable for slot in slots)


def test_host_without_valid_zone_gets_no_slots() -> None:
    host = single_star_host(1.0)
    host.outer_stable_au = host.inner_stable_au / 2
    assert generate_slots(host, make_rng(0)) == []


def test_s_type_slots_stay_inside_the_companion_limit() -> None:
    stars, hierarchy = binary(1.0, 0.5, 20.0)
    hosts = build_orbit_hosts(hierarchy, {star.id: star for star in stars})
    for host in hosts:
        for slot in generate_slots(host, make_rng(2)):
            assert host.inner_stable_au <= slot.a_au <= host.outer_stable_au


def test_filling_a_slot_twice_is_refused() -> None:
    slot = generate_slots(single_star_host(1.0), make_rng(0))[0]
    slot.fill("planet-star-0-0")
    assert slot.filled and not slot.available
    with pytest.raises(ValueError):
        slot.fill("planet-star-0-0")
    assert slot.to_dict()["body_id"] == "planet-star-0-0"
