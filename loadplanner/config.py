import os
from dataclasses import dataclass, fields

# Federal defaults; states may vary.
LEGAL_HEIGHT_FT = 13.5
LEGAL_WIDTH_FT = 8.5
LEGAL_GROSS_WEIGHT_LBS = 80000.0
TRACTOR_WEIGHT_LBS = 17000.0

ENV_PREFIX = "PLANNER_"


@dataclass(frozen=True)
class PlannerConfig:
    """Tunable thresholds for assignment, rebalancing, replanning and deck search."""

    soft_target: float = 0.85
    hard_cap: float = 1.0
    rebalance_hot: float = 0.90
    rebalance_cold: float = 0.80
    rebalance_cap: float = 0.95
    replan_cap: float = 0.95
    grid_step: float = 0.5
    max_grid_candidates: int = 40000
    escort_width: float = 12.0
    multi_escort_width: float = 14.0
    route_survey_height: float = 14.0

    def __post_init__(self) -> None:
        for name in ("soft_target", "hard_cap", "rebalance_hot", "rebalance_cold", "rebalance_cap", "replan_cap"):
            value = getattr(self, name)
            if not 0 < value <= 1:
                raise ValueError(f"{name} must be in (0, 1], got {value}")
        if self.soft_target > self.hard_cap:
            raise ValueError(f"soft_target {self.soft_target} exceeds hard_cap {self.hard_cap}")
        if self.grid_step <= 0:
            raise ValueError(f"grid_step must be positive, got {self.grid_step}")
        if self.max_grid_candidates < 1:
            raise ValueError(f"max_grid_candidates must be at least 1, got {self.max_grid_candidates}")

    @classmethod
    def from_env(cls, environ=None) -> "PlannerConfig":
        environ = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None or str(raw).strip() == "":
                continue
            caster = int if f.type in (int, "int") else float
            try:
                values[f.name] = caster(raw)
            except (TypeError, ValueError):
                raise ValueError(f"{ENV_PREFIX}{f.name.upper()} must be numeric, got {raw!r}") from None
        return cls(**values)


DEFAULT_CONFIG = PlannerConfig()


def get_config() -> PlannerConfig:
    """Re-read per request so environment overrides apply without a restart."""
    return PlannerConfig.from_env()
