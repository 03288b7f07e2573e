"""
Onboarding Progress Use Cases
"""

from .dashboard_stats_use_case import DashboardStatsUseCase
from .dtos import (
    DashboardStatsResponse,
    DocumentResponse,
    EmployeeOnboardingSummary,
    FeedbackResponse,
    OnboardingProgressResponse,
    PolicyResponse,
    TaskResponse,
)
from .get_progress_use_case import GetProgressUseCase
from .hr_onboarding_use_case import ListOnboardingRecordsUseCase, ProvideFeedbackUseCase
from .record_progress_use_case import (
    RecordPolicyAcknowledgmentUseCase,
    RecordTaskCompletionUseCase,
)

__all__ = [
    "GetProgressUseCase",
    "RecordTaskCompletionUseCase",
    "RecordPolicyAcknowledgmentUseCase",
    "ListOnboardingRecordsUseCase",
    "ProvideFeedbackUseCase",
    "DashboardStatsUseCase",
    "DashboardStatsResponse",
    "DocumentResponse",
    "EmployeeOnboardingSummary",
    "FeedbackResponse",
    "OnboardingProgressResponse",
    "PolicyResponse",
    "TaskResponse",
]
