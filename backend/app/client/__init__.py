from .api_client import ApiClientError, LaunchpadApiClient
from .session import LOADING_STEPS, LaunchpadSession, loading_step

__all__ = [
    "ApiClientError",
    "LaunchpadApiClient",
    "LaunchpadSession",
    "LOADING_STEPS",
    "loading_step",
]
