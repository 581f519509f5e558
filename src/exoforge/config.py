"""Input specification for a system generation call."""

from __future__ import annotations

import json
import math
import re
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from exoforge.generators.contracts import StarSpec
from exoforge.generators.star import SPECTRAL_CLASSES

MAX_STARS = 6

# System level override keys. Per-star values use "star.<index>.<field>"
# with <field> one of StarSpec.ACCEPTED_OVERRIDES.
SYSTEM_OVERRIDES = ("star_count", "age_gyr", "metallicity", "planet_count")
_STAR_OVERRIDE = re.compile(r"^star\.(\d+)\.(\w+)$")

DEFAULT_AGE_RANGE_GYR = (1.0, 10.0)
DEFAULT_METALLICITY_SIGMA = 0.2


def _number(value: Any, key: str) -> float:
    """Finite float value of an override, ValueError otherwise."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Override {key!r} must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise ValueError(f"Override {key!r} must be finite, got {value!r}")
    return number


@dataclass
class GenerationSpec:
    """
    Everything a generation call needs besides the random generator

    Args:
        seed (int):
            Top-level seed, the whole system is a function of it
        min_stars, max_stars (int):
            Allowed star count range
        spectral_classes (tuple of str):
            Optional spectral class hints, one per star ("G", "M", ...)
        age_gyr (float or None):
            System age, drawn when None
        metallicity (float or None):
            [Fe/H], drawn when None
        include_belts (bool):
            Whether asteroid belts are placed
        planet_count (int or None):
            Exact number of planets to place, None for probabilistic filling
        overrides (dict):
            Pinned values, see SYSTEM_OVERRIDES and the "star.<i>.<field>" form
    """

    seed: int
    min_stars: int = 1
    max_stars: int = 3
    spectral_classes: Tuple[str, ...] = ()
    age_gyr: Optional[float] = None
    metallicity: Optional[float] = None
    include_belts: bool = True
    planet_count: Optional[int] = None
    overrides: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.seed = int(self.seed)
        self.spectral_classes = tuple(str(c).upper() for c in self.spectral_classes or ())
        if not 1 <= self.min_stars <= self.max_stars <= MAX_STARS:
            raise ValueError(
                f"Star count range [{self.min_stars}, {self.max_stars}] must lie "
                f"within [1, {MAX_STARS}]"
            )
        for spectral_class in self.spectral_classes:
            if spectral_class not in SPECTRAL_CLASSES:
                raise ValueError(
                    f"Unknown spectral class {spectral_class!r}, expected one of "
                    f"{list(SPECTRAL_CLASSES)}"
                )
        if self.planet_count is not None and self.planet_count < 0:
            raise ValueError(f"planet_count must be non-negative, got {self.planet_count}")
        self._check_overrides()

    def _check_overrides(self) -> None:
        star_count = self.overrides.get("star_count")
        if star_count is not None and not 1 <= _number(star_count, "star_count") <= MAX_STARS:
            raise ValueError(f"star_count override must lie within [1, {MAX_STARS}]")
        # Stars beyond this index are never generated
        star_limit = self.max_stars if star_count is None else int(star_count)

        for key, value in self.overrides.items():
            if key in SYSTEM_OVERRIDES:
                self._check_system_override(key, value)
                continue
            match = _STAR_OVERRIDE.match(key)
            if match is None or match.group(2) not in StarSpec.ACCEPTED_OVERRIDES:
                raise ValueError(
                    f"Unsupported override {key!r}, expected one of "
                    f"{list(SYSTEM_OVERRIDES)} or 'star.<index>.<field>' with "
                    f"<field> in {list(StarSpec.ACCEPTED_OVERRIDES)}"
                )
            if int(match.group(1)) >= star_limit:
                raise ValueError(
                    f"Override {key!r} targets a star that is never generated, "
                    f"the system has at most {star_limit} star(s)"
                )
            if not _number(value, key) > 0:
                raise ValueError(f"Override {key!r} must be positive, got {value!r}")

    @staticmethod
    def _check_system_override(key: str, value: Any) -> None:
        number = _number(value, key)
        if key == "age_gyr" and not number > 0:
            raise ValueError(f"age_gyr override must be positive, got {value!r}")
        if key == "planet_count" and not number >= 0:
            raise ValueError(f"planet_count override must be non-negative, got {value!r}")

    def override(self, key: str, default: Any) -> Any:
        return self.overrides.get(key, default)

    @property
    def star_count(self) -> Optional[int]:
        value = self.overrides.get("star_count")
        return None if value is None else int(value)

    @property
    def target_planet_count(self) -> Optional[int]:
        value = self.overrides.get("planet_count", self.planet_count)
        return None if value is None else int(value)

    def star_overrides(self) -> Dict[int, Dict[str, Any]]:
        """Per-star overrides keyed by star index."""
        result: Dict[int, Dict[str, Any]] = {}
        for key, value in self.overrides.items():
            match = _STAR_OVERRIDE.match(key)
            if match is not None:
                result.setdefault(int(match.group(1)), {})[match.group(2)] = value
        return result

    def snapshot(self) -> Dict[str, Any]:
        """Plain copy of this GenerationSpec, safe to store alongside the result."""
        data = asdict(self)
        data["spectral_classes"] = list(self.spectral_classes)
        data["overrides"] = dict(sorted(self.overrides.items()))
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationSpec":
        known = {
            "seed",
            "min_stars",
            "max_stars",
            "spectral_classes",
            "age_gyr",
            "metallicity",
            "include_belts",
            "planet_count",
            "overrides",
        }
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown specification field(s) {unknown}")
        if "seed" not in data:
            raise ValueError("A specification needs a seed")
        return cls(**data)

    @classmethod
    def from_settings(cls, settings_path: Path) -> "GenerationSpec":
        """Load a spec from a JSON settings file."""
        data = json.loads(Path(settings_path).read_text())
        return cls.from_dict(data)
