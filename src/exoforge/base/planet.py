import astropy.constants as const
import astropy.units as u
import numpy as np
import pandas as pd

import exoforge.util.mechanics as mech


class Planet:
    """
    Class for a planet placed in an orbit slot
    """

    kind = "planet"

    def __init__(self, planet_dict, context) -> None:
        for att, value in planet_dict.items():
            setattr(self, att, value)
        self.moon_ids = list(planet_dict.get("moon_ids", []))
        self.context = context
        self.solve_dependent_params()

    def __repr__(self):
        """
        Make dataframe with planet attributes
        """
        p_df = pd.DataFrame(self.dump_params(), index=[0])
        return f"{type(self).__name__} object\n{p_df}"

    def dump_params(self):
        params = {
            "id": self.id,
            "host_id": self.host_id,
            "slot_index": self.slot_index,
            "archetype": self.archetype,
            "a": self.a.to_value(u.AU),
            "e": self.e,
            "T": self.T.to_value(u.yr),
            "mass": self.mass.to_value(u.M_earth),
            "radius": self.radius.to_value(u.R_earth),
            "density": self.density,
            "T_eq": self.T_eq.to_value(u.K),
        }
        return params

    def solve_dependent_params(self):
        total_mass = self.context.stellar_mass + self.mass.to_value(u.M_sun)
        self.T = mech.orbital_period(self.a.to_value(u.AU), total_mass) * u.yr
        self.density = mech.bulk_density(self.mass, self.radius)
        # Zero albedo equilibrium temperature from the host's luminosity
        flux = (self.context.stellar_luminosity * const.L_sun) / (4 * np.pi * self.a**2)
        self.T_eq = ((flux / (4 * const.sigma_sb)) ** 0.25).to(u.K)

    @property
    def hill_radius(self):
        """
        Hill radius against the host [AU]
        """
        return (
            mech.hill_radius(
                self.a.to_value(u.AU),
                self.mass.to_value(u.M_sun),
                self.context.stellar_mass,
            )
            * u.AU
        )


class Moon:
    """
    Class for a natural satellite of a planet
    """

    kind = "moon"

    def __init__(self, moon_dict, context) -> None:
        for att, value in moon_dict.items():
            setattr(self, att, value)
        self.context = context
        total_mass = (
            (context.parent_mass * u.M_earth + self.mass).to_value(u.M_sun)
        )
        self.T = (mech.orbital_period(self.a.to_value(u.AU), total_mass) * u.yr).to(u.d)

    def __repr__(self):
        return f"{type(self).__name__} object\n{pd.DataFrame(self.dump_params(), index=[0])}"

    def dump_params(self):
        return {
            "id": self.id,
            "parent_id": self.parent_id,
            "captured": self.captured,
            "retrograde": self.retrograde,
            "a": self.a.to_value(u.AU),
            "e": self.e,
            "T": self.T.to_value(u.d),
            "mass": self.mass.to_value(u.M_earth),
            "radius": self.radius.to_value(u.R_earth),
        }
