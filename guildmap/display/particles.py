"""ParticleSystem — fixed pool of ambient embers drifting up the map."""

import logging
from typing import Iterator, List, Optional

import numpy as np

from guildmap import config
from guildmap.shared.types import Particle

logger = logging.getLogger(__name__)

_VX_SPREAD = 0.15
_VY_MIN = 0.02
_VY_SPREAD = 0.06
_SIZE_MIN = 1.0
_SIZE_SPREAD = 3.0
_ALPHA_MIN = 0.06
_ALPHA_SPREAD = 0.2
_SPAWN_BELOW_MIN = 10.0
_SPAWN_BELOW_SPREAD = 40.0

MAX_ALPHA = _ALPHA_MIN + _ALPHA_SPREAD


class ParticleSystem:
    """Constant-size particle pool stored as parallel numpy arrays.

    Particles are never added or removed.  One that fades out or drifts past
    the margin around the container is respawned in place just below the
    bottom edge.
    """

    def __init__(
        self,
        count: int = config.PARTICLE_COUNT,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self._rng = rng if rng is not None else np.random.default_rng()
        self._count = int(count)
        self._x = np.zeros(self._count)
        self._y = np.zeros(self._count)
        self._vx = np.zeros(self._count)
        self._vy = np.zeros(self._count)
        self._size = np.zeros(self._count)
        self._alpha = np.zeros(self._count)
        self._width = 0.0
        self._height = 0.0

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Particle]:
        return iter(self.snapshot())

    @property
    def alphas(self) -> np.ndarray:
        return self._alpha

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def reseed(self, width: float, height: float) -> None:
        """Scatter the whole pool across a container of the given size."""
        self._width = max(0.0, float(width))
        self._height = max(0.0, float(height))
        n = self._count
        self._x[:] = self._rng.random(n) * self._width
        self._y[:] = self._rng.random(n) * self._height
        self._randomize_motion(np.ones(n, dtype=bool))
        logger.debug("Particle field reseeded for %.0fx%.0f", self._width, self._height)

    def step(self, frames: float = 1.0) -> None:
        """Advance the pool by *frames* display frames."""
        self._x += self._vx * frames
        self._y += self._vy * frames
        self._alpha -= config.PARTICLE_ALPHA_DECAY * frames

        expired = (
            (self._alpha <= 0)
            | (self._y < -config.PARTICLE_MARGIN_TOP)
            | (self._x < -config.PARTICLE_MARGIN_X)
            | (self._x > self._width + config.PARTICLE_MARGIN_X)
        )
        if expired.any():
            self._respawn(expired)

    def snapshot(self) -> List[Particle]:
        return [
            Particle(
                x=float(self._x[i]),
                y=float(self._y[i]),
                vx=float(self._vx[i]),
                vy=float(self._vy[i]),
                size=float(self._size[i]),
                alpha=float(self._alpha[i]),
            )
            for i in range(self._count)
        ]

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _respawn(self, mask: np.ndarray) -> None:
        n = int(np.count_nonzero(mask))
        self._x[mask] = self._rng.random(n) * self._width
        self._y[mask] = self._height + _SPAWN_BELOW_MIN + self._rng.random(n) * _SPAWN_BELOW_SPREAD
        self._randomize_motion(mask)

    def _randomize_motion(self, mask: np.ndarray) -> None:
        n = int(np.count_nonzero(mask))
        self._vx[mask] = (self._rng.random(n) - 0.5) * _VX_SPREAD
        self._vy[mask] = -_VY_MIN - self._rng.random(n) * _VY_SPREAD
        self._size[mask] = _SIZE_MIN + self._rng.random(n) * _SIZE_SPREAD
        self._alpha[mask] = _ALPHA_MIN + self._rng.random(n) * _ALPHA_SPREAD
