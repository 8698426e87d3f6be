"""AI drawing-plan interpreter: JSON plan in, drawing changes out."""
from .commands import apply_plan
from .decoder import decode_plan
from .executor import Executor
from .space import Space

__all__ = ["Executor", "Space", "apply_plan", "decode_plan"]
