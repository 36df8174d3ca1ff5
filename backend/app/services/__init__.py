from .key_store import resolve_key
from .analysis_store import create_analysis, delete_analysis, list_recent, record_to_dict
from .gemini_client import generate_grounded_analysis, generate_mockup_image

__all__ = [
    "resolve_key",
    "create_analysis",
    "delete_analysis",
    "list_recent",
    "record_to_dict",
    "generate_grounded_analysis",
    "generate_mockup_image",
]
