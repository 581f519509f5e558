"""Unit tests for the closed-form orbital mechanics."""
from __future__ import annotations

import math

import astropy.units as u
import pytest

import exoforge.util.mechanics as mech
from exoforge.util.rng import draw_seed, fork, make_rng, weighted_index


def test_kepler_period_in_solar_units() -> None:
    assert mech.orbital_period(1.0, 1.0) == pytest.approx(1.0)
    assert mech.orbital_period(4.0, 1.0) == pytest.approx(8.0)
    assert mech.semi_major_axis(8.0, 1.0) == pytest.approx(4.0)


def test_invalid_inputs_give_zero() -> None:
    assert mech.orbital_period(-1.0, 1.0) == 0.0
    assert mech.orbital_period(1.0, math.nan) == 0.0
    assert mech.semi_major_axis(1.0, 0.0) == 0.0
    assert mech.hill_radius(1.0, -1.0, 1.0) == 0.0
    assert mech.roche_limit(1.0, 0.0, 1.0) == 0.0
    assert mech.mass_ratio(0.0, 1.0) == 0.0
    assert mech.s_type_critical_radius(10.0, 0.3, 1.0) == 0.0
    assert mech.p_type_critical_radius(10.0, 1.5, 0.0) == 0.0
    assert mech.habitable_zone(0.0) == (0.0, 0.0)
    assert mech.frost_line(-2.0) == 0.0
    assert mech.outer_region_limit(0.0) == 0.0
    assert mech.resonant_distance(1.0, 2.0, jitter=-1.0) == 0.0
    assert mech.is_stable_against_companion(1.0, 1.0, 0.0, 10.0) is False


def test_hill_and_roche() -> None:
    assert mech.hill_radius(1.0, 3e-6, 1.0) == pytest.approx(0.01)
    assert mech.roche_limit(1.0, 1.0, 1.0) == pytest.approx(mech.ROCHE_COEFF)
    assert mech.roche_limit(1.0, 8.0, 1.0) == pytest.approx(2 * mech.ROCHE_COEFF)


def test_mass_ratio() -> None:
    assert mech.mass_ratio(3.0, 1.0) == pytest.approx(0.25)
    assert mech.mass_ratio(1.0, 1.0) == pytest.approx(0.5)


def test_critical_radii_circular_limit() -> None:
    assert mech.s_type_critical_radius(10.0, 0.0, 0.0) == pytest.approx(
        0.464 * 10.0 * mech.S_TYPE_SAFETY
    )
    assert mech.p_type_critical_radius(10.0, 0.0, 0.0) == pytest.approx(
        1.60 * 10.0 * mech.P_TYPE_SAFETY
    )


def test_eccentric_binaries_shrink_s_type_and_widen_p_type() -> None:
    assert mech.s_type_critical_radius(10.0, 0.3, 0.5) < mech.s_type_critical_radius(
        10.0, 0.3, 0.0
    )
    assert mech.p_type_critical_radius(10.0, 0.3, 0.5) > mech.p_type_critical_radius(
        10.0, 0.3, 0.0
    )


def test_temperature_zones_scale_with_sqrt_luminosity() -> None:
    inner, outer = mech.habitable_zone(4.0)
    assert inner == pytest.approx(1.9)
    assert outer == pytest.approx(3.34)
    assert mech.frost_line(4.0) == pytest.approx(5.4)
    assert inner < outer < mech.frost_line(4.0)


def test_outer_region_is_the_disk_for_ordinary_stars() -> None:
    assert mech.formation_disk_radius(1.0) == pytest.approx(100.0)
    assert mech.jacobi_radius(1.0) == pytest.approx((1.7 * u.pc).to_value(u.AU))
    assert mech.outer_region_limit(1.0) == pytest.approx(100.0)


def test_resonant_distance() -> None:
    assert mech.resonant_distance(1.0, 8.0) == pytest.approx(4.0)
    assert mech.resonant_distance(1.0, 8.0, jitter=0.1) == pytest.approx(4.4)


def test_companion_stability_limit() -> None:
    # Equal masses 30 AU apart: a third of the separation is the tighter limit
    assert mech.is_stable_against_companion(9.9, 1.0, 1.0, 30.0)
    assert not mech.is_stable_against_companion(10.1, 1.0, 1.0, 30.0)


def test_bulk_density_of_earth() -> None:
    assert mech.bulk_density(1 * u.M_earth, 1 * u.R_earth) == pytest.approx(5.51, rel=0.01)


def test_log_uniform_stays_in_range() -> None:
    rng = make_rng(5)
    draws = [mech.log_uniform(rng, 0.1, 1000.0) for _ in range(500)]
    assert all(0.1 <= d <= 1000.0 for d in draws)


def test_fork_is_reproducible_and_consumes_one_draw() -> None:
    a, b = make_rng(11), make_rng(11)
    assert fork(a).random() == fork(b).random()
    assert a.random() == b.random()

    c, d = make_rng(11), make_rng(11)
    fork(c)
    draw_seed(d)
    assert c.random() == d.random()


def test_weighted_index_ignores_zero_weights() -> None:
    rng = make_rng(2)
    assert {weighted_index(rng, [0.0, 3.0, 0.0]) for _ in range(50)} == {1}
