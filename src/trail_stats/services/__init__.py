"""
Service layer for coordinating business logic.

This package contains high-level services that coordinate multiple components
to accomplish business goals.
"""

from .activity_service import ActivityResult, ActivityService
from .analysis_service import AnalysisService

__all__ = [
    "ActivityResult",
    "ActivityService",
    "AnalysisService",
]
