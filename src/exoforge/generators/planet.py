import astropy.units as u

from exoforge.base.planet import Planet
from exoforge.util.mechanics import log_uniform

# Mass range [Mearth] per size archetype
ARCHETYPE_MASS_RANGES = {
    "rocky": (0.05, 2.0),
    "super_earth": (2.0, 10.0),
    "mini_neptune": (4.0, 20.0),
    "ice_giant": (10.0, 50.0),
    "gas_giant": (50.0, 4000.0),
}
JUPITER_MASS_MEARTH = 317.8
JUPITER_RADIUS_REARTH = 11.2


def radius_from_mass(mass_mearth):
    """
    Piecewise mass-radius relation [Rearth], loosely after Chen & Kipping
    (2017): rocky below 2 Mearth, volatile-rich below 50, degenerate above
    """
    if mass_mearth < 2.0:
        return mass_mearth**0.27
    if mass_mearth < 50.0:
        return max(2.0**0.27, 0.8 * mass_mearth**0.59)
    return JUPITER_RADIUS_REARTH * (mass_mearth / JUPITER_MASS_MEARTH) ** -0.04


class ArchetypePlanetGenerator:
    """
    Default planet generator. The archetype sets the mass range; the orbit
    comes from the PlanetSpec overrides when present.
    """

    MAX_ECCENTRICITY = 0.3

    def generate(self, spec, context, rng):
        if spec.archetype not in ARCHETYPE_MASS_RANGES:
            raise ValueError(f"Unknown planet archetype {spec.archetype!r}")
        mass = float(
            spec.override("mass", log_uniform(rng, *ARCHETYPE_MASS_RANGES[spec.archetype]))
        )
        radius = float(spec.override("radius", radius_from_mass(mass)))
        a = float(spec.override("semi_major_axis", context.orbital_distance))
        e = float(
            spec.override("eccentricity", rng.random() ** 2 * self.MAX_ECCENTRICITY)
        )
        return Planet(
            {
                "id": spec.body_id,
                "host_id": spec.host_id,
                "slot_index": spec.slot_index,
                "archetype": spec.archetype,
                "a": a * u.AU,
                "e": e,
                "mass": mass * u.M_earth,
                "radius": radius * u.R_earth,
            },
            context.at(a),
        )
