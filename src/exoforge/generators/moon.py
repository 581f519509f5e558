import astropy.units as u
import numpy as np

from exoforge.base.planet import Moon
from exoforge.util.mechanics import log_uniform

# Bulk densities [g / cm^3]
ICY_DENSITY = 1.8
ROCKY_DENSITY = 3.3

# Moon to planet mass ratios
REGULAR_MASS_RATIO_GIANT = (1e-6, 1e-4)
REGULAR_MASS_RATIO_SMALL = (1e-4, 1.2e-2)
CAPTURED_MASS_RATIO = (1e-10, 1e-7)
GIANT_PARENT_MEARTH = 10.0


def moon_density(icy):
    return ICY_DENSITY if icy else ROCKY_DENSITY


class SatelliteGenerator:
    """
    Default moon generator. Regular moons are a sizeable fraction of their
    planet on near-circular orbits, captured moons are small, eccentric and
    half of them retrograde.
    """

    def generate(self, spec, context, rng):
        if spec.captured:
            ratio_range = CAPTURED_MASS_RATIO
        elif context.parent_mass >= GIANT_PARENT_MEARTH:
            ratio_range = REGULAR_MASS_RATIO_GIANT
        else:
            ratio_range = REGULAR_MASS_RATIO_SMALL
        mass = spec.override("mass", context.parent_mass * log_uniform(rng, *ratio_range))
        mass = float(mass) * u.M_earth

        density = moon_density(spec.icy) * u.g / u.cm**3
        default_radius = ((3 * mass / (4 * np.pi * density)) ** (1 / 3)).to_value(u.R_earth)
        radius = float(spec.override("radius", default_radius)) * u.R_earth

        if spec.captured:
            e = rng.uniform(0.1, 0.5)
            retrograde = bool(rng.random() < 0.5)
        else:
            e = rng.random() ** 2 * 0.05
            retrograde = False
        e = float(spec.override("eccentricity", e))
        a = float(spec.override("semi_major_axis", context.orbital_distance))

        return Moon(
            {
                "id": spec.body_id,
                "parent_id": spec.parent_id,
                "captured": spec.captured,
                "retrograde": retrograde,
                "icy": spec.icy,
                "a": a * u.AU,
                "e": e,
                "mass": mass,
                "radius": radius,
            },
            context,
        )
