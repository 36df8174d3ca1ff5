# Schemas package
from .analysis_schema import (
    AnalysisRecordResponse,
    AnalyzeRequest,
    DeleteResponse,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    MockupRequest,
    MockupResponse,
)

__all__ = [
    "LoginRequest",
    "AnalyzeRequest",
    "MockupRequest",
    "LoginResponse",
    "AnalysisRecordResponse",
    "DeleteResponse",
    "MockupResponse",
    "ErrorResponse",
]
