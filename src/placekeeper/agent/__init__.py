from .executor import ActionExecutor
from .cycle import DecisionCycle

__all__ = ["ActionExecutor", "DecisionCycle"]
