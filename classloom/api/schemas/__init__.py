"""Pydantic schemas for API request/response models."""

from .diagram import (
    DiagramAnalysisResponse,
    DiagramList,
    DiagramRequest,
    ExtractRequest,
    FromSourceRequest,
    GenerateResponse,
    SourceFile,
    ValidationResponse,
)

__all__ = [
    'DiagramAnalysisResponse',
    'DiagramList',
    'DiagramRequest',
    'ExtractRequest',
    'FromSourceRequest',
    'GenerateResponse',
    'SourceFile',
    'ValidationResponse',
]
