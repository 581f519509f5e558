__all__ = [
    "BarycenterNode",
    "Companion",
    "GenerationError",
    "HostType",
    "OrbitHost",
    "OrbitSlot",
    "StarNode",
    "StellarConfiguration",
    "StellarHierarchy",
    "Zone",
    "build_hierarchy",
    "build_orbit_hosts",
    "build_stellar_configuration",
    "generate_slots",
]

from .hierarchy import BarycenterNode, GenerationError, StarNode, StellarHierarchy
from .host import Companion, HostType, OrbitHost, Zone, build_orbit_hosts
from .slots import OrbitSlot, generate_slots
from .stellar import StellarConfiguration, build_hierarchy, build_stellar_configuration
