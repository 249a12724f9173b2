# meetpoint/analysis/config.py

from dataclasses import dataclass

@dataclass(frozen=True)
class SolverConfig:
    """
    Tunables for the meeting-point solvers.

    Attributes
    ----------
    epsilon
        Geometric median stops once a step moves less than this (km).
    max_iterations
        Upper bound on geometric median iterations.
    step_km
        Spacing of the minimax search grid (km).
    radius_km
        Half-width of the minimax search grid around the centroid (km).
    """
    epsilon:         float = 1e-6
    max_iterations:  int   = 200
    step_km:         float = 1.0
    radius_km:       float = 6.0

    def __post_init__(self) -> None:
        if self.epsilon < 0:
            raise ValueError(f"epsilon must be >= 0, got {self.epsilon}")
        if self.max_iterations < 0:
            raise ValueError(f"max_iterations must be >= 0, got {self.max_iterations}")
        if self.step_km <= 0:
            raise ValueError(f"step_km must be > 0, got {self.step_km}")
        if self.radius_km < 0:
            raise ValueError(f"radius_km must be >= 0, got {self.radius_km}")

    @classmethod
    def default(cls) -> "SolverConfig":
        """Preset matching the interactive defaults (1 km grid, 6 km radius)."""
        return cls()

    @classmethod
    def precise(cls) -> "SolverConfig":
        """Preset for offline runs: finer grid, tighter convergence."""
        return cls(
            epsilon=1e-9,
            max_iterations=1000,
            step_km=0.25,
            radius_km=6.0,
        )

    @classmethod
    def from_name(cls, name: str) -> "SolverConfig":
        """Look up a preset by name ("default" or "precise")."""
        presets = {"default": cls.default, "precise": cls.precise}
        try:
            return presets[name]()
        except KeyError:
            raise ValueError(
                f"unknown preset {name!r}, expected one of {sorted(presets)}"
            ) from None


PRESETS = ("default", "precise")
