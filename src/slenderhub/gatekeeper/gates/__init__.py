"""Gates: индивидуальные гейты gateway flow.

- GATE 0: Task completion
- GATE 1: Monetization redirect
- GATE 2: Loader source
"""

from .gate_00_task_completion import Gate00TaskCompletion, Gate00Result
from .gate_01_monetization import Gate01Monetization, Gate01Result
from .gate_02_loader_source import Gate02LoaderSource, Gate02Result

__all__ = [
    "Gate00TaskCompletion",
    "Gate00Result",
    "Gate01Monetization",
    "Gate01Result",
    "Gate02LoaderSource",
    "Gate02Result",
]
