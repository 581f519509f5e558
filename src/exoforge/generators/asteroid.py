import astropy.units as u
import numpy as np

from exoforge.base.asteroid import Asteroid, AsteroidComposition
from exoforge.util.mechanics import log_uniform

# Bulk densities [g / cm^3]
COMPOSITION_DENSITY = {
    AsteroidComposition.CARBONACEOUS: 1.4,
    AsteroidComposition.SILICATE: 2.7,
    AsteroidComposition.METALLIC: 5.3,
    AsteroidComposition.ICY: 1.0,
}


class MinorBodyGenerator:
    """
    Default asteroid generator, a homogeneous sphere of the AsteroidSpec's
    composition
    """

    DIAMETER_RANGE_KM = (1.0, 100.0)
    MAX_ECCENTRICITY = 0.25

    def generate(self, spec, context, rng):
        composition = AsteroidComposition(spec.composition)
        diameter = float(
            spec.override("diameter", log_uniform(rng, *self.DIAMETER_RANGE_KM))
        ) * u.km
        e = float(spec.override("eccentricity", rng.uniform(0, self.MAX_ECCENTRICITY)))
        a = float(spec.override("semi_major_axis", context.orbital_distance))
        density = COMPOSITION_DENSITY[composition] * u.g / u.cm**3
        mass = (4 / 3 * np.pi * (diameter / 2) ** 3 * density).to(u.kg)
        return Asteroid(
            {
                "id": spec.body_id,
                "belt_id": spec.belt_id,
                "composition": composition,
                "a": a * u.AU,
                "e": e,
                "diameter": diameter,
                "mass": mass,
            }
        )
