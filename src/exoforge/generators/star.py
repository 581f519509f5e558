import astropy.units as u
import numpy as np

from exoforge.base.star import Star
from exoforge.util.mechanics import log_uniform
from exoforge.util.rng import weighted_index

# Main-sequence mass ranges [Msun] and field frequencies per spectral class
SPECTRAL_CLASSES = {
    "O": ((16.0, 60.0), 0.0003),
    "B": ((2.1, 16.0), 0.0013),
    "A": ((1.4, 2.1), 0.006),
    "F": ((1.1, 1.4), 0.03),
    "G": ((0.9, 1.1), 0.076),
    "K": ((0.6, 0.9), 0.121),
    "M": ((0.08, 0.6), 0.7654),
}
T_SUN = 5772.0


def luminosity_from_mass(mass_msun):
    """
    Main-sequence mass-luminosity relation [Lsun]
    """
    if mass_msun < 2:
        return mass_msun**4
    return 1.4 * mass_msun**3.5


def radius_from_mass(mass_msun):
    """
    Main-sequence mass-radius relation [Rsun]
    """
    if mass_msun < 1:
        return mass_msun**0.8
    return mass_msun**0.57


def temperature_from(luminosity_lsun, radius_rsun):
    """
    Stefan-Boltzmann effective temperature [K]
    """
    return T_SUN * (luminosity_lsun / radius_rsun**2) ** 0.25


class MainSequenceStarGenerator:
    """
    Default star generator. Draws a main-sequence star of the hinted spectral
    class (or one drawn from field frequencies) and derives its radius,
    luminosity and temperature from the mass.
    """

    def generate(self, spec, rng):
        spectral_class = spec.spectral_class
        if spectral_class is None:
            classes = list(SPECTRAL_CLASSES)
            weights = [SPECTRAL_CLASSES[c][1] for c in classes]
            spectral_class = classes[weighted_index(rng, weights)]
        spectral_class = spectral_class.upper()
        if spectral_class not in SPECTRAL_CLASSES:
            raise ValueError(
                f"Unknown spectral class {spectral_class!r}, expected one of "
                f"{list(SPECTRAL_CLASSES)}"
            )
        (low, high), _ = SPECTRAL_CLASSES[spectral_class]

        mass = float(spec.override("mass", log_uniform(rng, low, high)))
        radius = float(spec.override("radius", radius_from_mass(mass)))
        luminosity = float(spec.override("luminosity", luminosity_from_mass(mass)))
        temperature = float(
            spec.override("temperature", temperature_from(luminosity, radius))
        )

        # Subclass 0 at the top of the class mass range, 9 at the bottom
        position = np.log(mass / low) / np.log(high / low)
        subclass = int(np.clip(np.floor(10 * (1 - position)), 0, 9))

        return Star(
            {
                "id": spec.body_id,
                "spectral_type": f"{spectral_class}{subclass}V",
                "mass": mass * u.M_sun,
                "radius": radius * u.R_sun,
                "luminosity": luminosity * u.L_sun,
                "effective_temperature": temperature * u.K,
                "age": spec.age_gyr * u.Gyr,
                "metallicity": spec.metallicity,
            }
        )
