from .access_key import AccessKey
from .analysis import Analysis

__all__ = ["AccessKey", "Analysis"]
