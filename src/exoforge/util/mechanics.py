import astropy.constants as const
import astropy.units as u
import numpy as np

"""
Closed-form orbital mechanics used to lay out a system. Everything here works
on plain floats with the unit carried in the argument name. Invalid input
(non-positive or non-finite masses, distances, periods) gives back 0.0 or
False so callers can treat "no answer" as "unusable region".
"""

# Holman & Wiegert (1999) safety margins
S_TYPE_SAFETY = 0.9
P_TYPE_SAFETY = 1.1

# Luminosity scaled zone boundaries [AU / sqrt(Lsun)]
HZ_INNER_COEFF = 0.95
HZ_OUTER_COEFF = 1.67
FROST_LINE_COEFF = 2.7

# Outer region ceiling
DISK_RADIUS_AU = 100.0
DISK_MASS_EXPONENT = 0.6
JACOBI_RADIUS_AU = (1.7 * u.pc).to_value(u.AU)

ROCHE_COEFF = 2.44

# Companion perturbation heuristic
COMPANION_SEPARATION_FRACTION = 1 / 3
COMPANION_HILL_FRACTION = 0.5

_R_sun2AU = const.R_sun.to_value(u.AU)
_R_earth2AU = const.R_earth.to_value(u.AU)
_M_earth2Msun = (const.M_earth / const.M_sun).decompose().value


def _positive(*values):
    for value in values:
        if not np.isfinite(value) or value <= 0:
            return False
    return True


def orbital_period(a_au, mass_msun):
    """
    Kepler's third law in solar units
    Args:
        a_au (float): semi-major axis [AU]
        mass_msun (float): total mass of the system [Msun]
    Returns:
        float: orbital period [yr], 0.0 on invalid input
    """
    if not _positive(a_au, mass_msun):
        return 0.0
    return float(np.sqrt(a_au**3 / mass_msun))


def semi_major_axis(period_yr, mass_msun):
    """
    Inverse of orbital_period
    Args:
        period_yr (float): orbital period [yr]
        mass_msun (float): total mass of the system [Msun]
    Returns:
        float: semi-major axis [AU], 0.0 on invalid input
    """
    if not _positive(period_yr, mass_msun):
        return 0.0
    return float((mass_msun * period_yr**2) ** (1 / 3))


def hill_radius(a, mass, primary_mass):
    """
    Radius of the Hill sphere, R_H = a (m / 3M)^(1/3). The result has the
    unit of a, the two masses only need to share a unit.
    """
    if not _positive(a, mass, primary_mass):
        return 0.0
    return float(a * (mass / (3 * primary_mass)) ** (1 / 3))


def roche_limit(primary_radius, primary_density, satellite_density):
    """
    Fluid Roche limit, d = 2.44 R_p (rho_p / rho_s)^(1/3). The result has
    the unit of primary_radius.
    """
    if not _positive(primary_radius, primary_density, satellite_density):
        return 0.0
    return float(
        ROCHE_COEFF * primary_radius * (primary_density / satellite_density) ** (1 / 3)
    )


def mass_ratio(primary, secondary):
    """
    mu = m2 / (m1 + m2), 0.0 if either mass is unusable
    """
    if not _positive(primary, secondary):
        return 0.0
    return secondary / (primary + secondary)


def s_type_critical_radius(separation_au, mu, eccentricity):
    """
    Largest stable circumstellar orbit around one member of a binary, from the
    Holman & Wiegert (1999) fit, scaled down by S_TYPE_SAFETY
    Args:
        separation_au (float): binary semi-major axis [AU]
        mu (float): mass of the perturbing companion over the total mass
        eccentricity (float): binary eccentricity
    Returns:
        float: critical radius [AU]
    """
    if not _positive(separation_au) or not (0 <= mu <= 1) or not (0 <= eccentricity < 1):
        return 0.0
    e = eccentricity
    poly = (
        0.464
        - 0.380 * mu
        - 0.631 * e
        + 0.586 * mu * e
        + 0.150 * e**2
        - 0.198 * mu * e**2
    )
    return max(0.0, poly * separation_au * S_TYPE_SAFETY)


def p_type_critical_radius(separation_au, mu, eccentricity):
    """
    Smallest stable circumbinary orbit, from the Holman & Wiegert (1999) fit,
    scaled up by P_TYPE_SAFETY
    Args:
        separation_au (float): binary semi-major axis [AU]
        mu (float): secondary mass over the total mass
        eccentricity (float): binary eccentricity
    Returns:
        float: critical radius [AU]
    """
    if not _positive(separation_au) or not (0 <= mu <= 1) or not (0 <= eccentricity < 1):
        return 0.0
    e = eccentricity
    poly = (
        1.60
        + 5.10 * e
        - 2.22 * e**2
        + 4.12 * mu
        - 4.27 * e * mu
        - 5.09 * mu**2
        + 4.61 * e**2 * mu**2
    )
    return max(0.0, poly * separation_au * P_TYPE_SAFETY)


def habitable_zone(luminosity_lsun):
    """
    Inner and outer habitable zone edges [AU]
    """
    if not _positive(luminosity_lsun):
        return 0.0, 0.0
    scale = np.sqrt(luminosity_lsun)
    return float(HZ_INNER_COEFF * scale), float(HZ_OUTER_COEFF * scale)


def frost_line(luminosity_lsun):
    if not _positive(luminosity_lsun):
        return 0.0
    return float(FROST_LINE_COEFF * np.sqrt(luminosity_lsun))


def formation_disk_radius(mass_msun):
    if not _positive(mass_msun):
        return 0.0
    return float(DISK_RADIUS_AU * mass_msun**DISK_MASS_EXPONENT)


def jacobi_radius(mass_msun):
    """
    Galactic tidal radius of a system [AU]
    """
    if not _positive(mass_msun):
        return 0.0
    return float(JACOBI_RADIUS_AU * mass_msun ** (1 / 3))


def outer_region_limit(mass_msun):
    """
    Outer edge of the region planets can form and survive in, the smaller of
    the protoplanetary disk radius and the Jacobi radius [AU]
    """
    return min(formation_disk_radius(mass_msun), jacobi_radius(mass_msun))


def resonant_distance(a_au, ratio, jitter=0.0):
    """
    Distance of the orbit in a period ratio with an orbit at a_au,
    a' = a ratio^(2/3) (1 + jitter)
    """
    if not _positive(a_au, ratio) or jitter <= -1:
        return 0.0
    return float(a_au * ratio ** (2 / 3) * (1 + jitter))


def is_stable_against_companion(
    a_au, host_mass_msun, companion_mass_msun, companion_separation_au
):
    """
    Rough check that an orbit at a_au around the host is not torn apart by a
    companion at companion_separation_au. The orbit has to sit inside a
    fraction of the separation and inside a fraction of the host's Hill
    sphere against the companion.
    """
    if not _positive(a_au, host_mass_msun, companion_mass_msun, companion_separation_au):
        return False
    hill = hill_radius(companion_separation_au, host_mass_msun, companion_mass_msun)
    limit = min(
        COMPANION_SEPARATION_FRACTION * companion_separation_au,
        COMPANION_HILL_FRACTION * hill,
    )
    return a_au < limit


def bulk_density(mass, radius):
    """
    Mean density of a sphere [g / cm^3]
    Args:
        mass (astropy Quantity): body mass
        radius (astropy Quantity): body radius
    Returns:
        float: density, 0.0 on invalid input
    """
    mass_g = mass.to_value(u.g)
    radius_cm = radius.to_value(u.cm)
    if not _positive(mass_g, radius_cm):
        return 0.0
    return float(mass_g / (4 / 3 * np.pi * radius_cm**3))


def log_uniform(rng, low, high):
    """
    Draw from a log-uniform distribution on [low, high]
    """
    return float(np.exp(rng.uniform(np.log(low), np.log(high))))
