__all__ = [
    "orbital_period",
    "semi_major_axis",
    "hill_radius",
    "roche_limit",
    "mass_ratio",
    "s_type_critical_radius",
    "p_type_critical_radius",
    "habitable_zone",
    "frost_line",
    "formation_disk_radius",
    "jacobi_radius",
    "outer_region_limit",
    "resonant_distance",
    "is_stable_against_companion",
    "bulk_density",
    "log_uniform",
    "make_rng",
    "draw_seed",
    "fork",
    "weighted_index",
]

from .mechanics import (
    orbital_period,
    semi_major_axis,
    hill_radius,
    roche_limit,
    mass_ratio,
    s_type_critical_radius,
    p_type_critical_radius,
    habitable_zone,
    frost_line,
    formation_disk_radius,
    jacobi_radius,
    outer_region_limit,
    resonant_distance,
    is_stable_against_companion,
    bulk_density,
    log_uniform,
)
from .rng import make_rng, draw_seed, fork, weighted_index
