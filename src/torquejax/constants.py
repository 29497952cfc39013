"""
The `constants` module defines the physical constants used by the rotational dynamics partials.
"""

# Universal Constants
"""
Newtonian constant of gravitation. Units: *m^3/(kg s^2)*

References:

1. CODATA 2018 recommended values.
"""
G = 6.67430e-11  # [m^3/(kg s^2)] CODATA 2018

# Earth Constants
"""
Earth's equatorial radius. [m]

References:

1. GGM05s Gravity Model
"""
R_EARTH = 6.378136300e6  # [m] GGM05s Value

"""
Earth's Gravitational constant [m^3/s^2]

References:

1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
Applications*, 2012.
"""
GM_EARTH = 3.986004415e14  # [m^3/s^2] GGM05s Value

# Moon Constants
"""
Gravitational constant of the Moon. [m^3/s^2]

References:

1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
Applications*, 2012.
"""
GM_MOON = 4902.800066 * 1e9

"""
Mean radius of the Moon. [m]

References:

1. IAU WG on Cartographic Coordinates and Rotational Elements, 2015.
"""
R_MOON = 1737.4e3  # [m]

"""
Scaled mean moment of inertia of the Moon, I / (M R^2). Dimensionless.

References:

1. J. G. Williams et al., *Lunar interior properties from the GRAIL
mission*, JGR Planets, 2014.
"""
MEAN_MOMENT_OF_INERTIA_MOON = 0.3929
