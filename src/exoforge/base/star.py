import astropy.units as u
import pandas as pd


class Star:
    """
    A star of a generated system
    """

    kind = "star"

    def __init__(self, star_dict):
        self.id = star_dict["id"]
        self.spectral_type = star_dict["spectral_type"]
        self.mass = star_dict["mass"]
        self.radius = star_dict["radius"]
        self.luminosity = star_dict["luminosity"]
        self.effective_temperature = star_dict["effective_temperature"]
        self.age = star_dict.get("age", 4.6 * u.Gyr)
        self.metallicity = star_dict.get("metallicity", 0.0)

    def __repr__(self):
        return f"{type(self).__name__} object\n{pd.DataFrame(self.dump_params(), index=[0])}"

    @property
    def mass_msun(self):
        return self.mass.to_value(u.M_sun)

    @property
    def radius_au(self):
        return self.radius.to_value(u.AU)

    @property
    def luminosity_lsun(self):
        return self.luminosity.to_value(u.L_sun)

    @property
    def temperature_k(self):
        return self.effective_temperature.to_value(u.K)

    def dump_params(self):
        return {
            "id": self.id,
            "spectral_type": self.spectral_type,
            "mass": self.mass_msun,
            "radius": self.radius.to_value(u.R_sun),
            "luminosity": self.luminosity_lsun,
            "effective_temperature": self.temperature_k,
            "age": self.age.to_value(u.Gyr),
            "metallicity": self.metallicity,
        }
