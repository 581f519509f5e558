import logging
from dataclasses import replace

import pandas as pd
from tqdm import tqdm

from exoforge.config import GenerationSpec
from exoforge.generate import generate_system
from exoforge.util.rng import draw_seed, make_rng

logger = logging.getLogger(__name__)


class Universe:
    """
    A batch of generated systems. Keeps track of the systems and the seeds
    they came from.
    """

    def __init__(self, spec, seeds=None, n=None, generators=None, progress=True):
        """
        Args:
            spec (GenerationSpec):
                Template for every system, only the seed differs between them
            seeds (list of int):
                Seeds to generate, one system each
            n (int):
                Number of systems when no seeds are given. Their seeds are
                drawn from a generator seeded with spec.seed.
            generators (Generators):
                Leaf generators shared by every system
            progress (bool):
                Show a tqdm progress bar
        """
        self.type = "Generated"
        if seeds is None:
            if n is None:
                raise ValueError("Universe needs either seeds or n")
            base = make_rng(spec.seed)
            seeds = [draw_seed(base) for _ in range(n)]
        self.seeds = [int(seed) for seed in seeds]
        self.systems = []
        for seed in tqdm(
            self.seeds,
            desc="Generating systems",
            position=0,
            leave=False,
            disable=not progress,
        ):
            self.systems.append(generate_system(replace(spec, seed=seed), generators=generators))
        logger.info("Generated %d systems", len(self.systems))

    def __repr__(self):
        str = f"{self.type} universe\n"
        str += f"{len(self.systems)} systems loaded"
        return str

    def __len__(self):
        return len(self.systems)

    def __iter__(self):
        return iter(self.systems)

    def summary(self):
        """
        One row per system with its body counts
        """
        rows = []
        for system in self.systems:
            rows.append(
                {
                    "seed": system.provenance.seed,
                    "stars": len(system.star_ids),
                    "hosts": len(system.hosts),
                    "planets": len(system.planet_ids),
                    "moons": len(system.moon_ids),
                    "belts": len(system.belts),
                    "asteroids": len(system.asteroid_ids),
                    "fingerprint": system.fingerprint(),
                }
            )
        return pd.DataFrame(rows)

    @classmethod
    def from_settings(cls, settings_path, n, **kwargs):
        return cls(GenerationSpec.from_settings(settings_path), n=n, **kwargs)
