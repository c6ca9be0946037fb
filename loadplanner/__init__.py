from loadplanner.config import DEFAULT_CONFIG, PlannerConfig
from loadplanner.model import plan_loads, replan_load

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "PlannerConfig",
    "plan_loads",
    "replan_load",
]
