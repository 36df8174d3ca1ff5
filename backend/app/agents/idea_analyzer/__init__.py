from .normalizer import normalize
from .pipeline import list_history, login, remove_analysis, run_analysis, run_mockup
from .schema import AnalysisData

__all__ = [
    "AnalysisData",
    "list_history",
    "login",
    "normalize",
    "remove_analysis",
    "run_analysis",
    "run_mockup",
]
