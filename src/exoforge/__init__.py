__all__ = [
    "GenerationError",
    "GenerationSpec",
    "Generators",
    "System",
    "Universe",
    "generate_system",
]

__version__ = "0.3.0"

from .architecture.hierarchy import GenerationError
from .base.system import System
from .config import GenerationSpec
from .generate import generate_system
from .generators import Generators
from .universe import Universe
