"""
Onboarding Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    CompletionPolicy,
    DocumentStatus,
    FileBucket,
    InvitationStatus,
    OnboardingStatus,
    PolicyFileType,
    ResumeStatus,
    SubscriptionPlan,
    SubscriptionStatus,
    TaskCategory,
    TaskStatus,
    UserRole,
)

# Export metadata variants
from .file_metadata import (
    EmployeeDocumentMetadata,
    FileMetadata,
    PolicyMetadata,
    ResumeMetadata,
    parse_file_metadata,
)

# Export all entities
from .company import Company, PolicyTemplate, TaskTemplate
from .user import User
from .invitation import Invitation
from .onboarding_record import OnboardingRecord
from .onboarding_task import OnboardingTask
from .policy_acknowledgment import PolicyAcknowledgment
from .stored_file import CHUNK_SIZE, StoredFile, StoredFileChunk
from .onboarding_document import OnboardingDocument

__all__ = [
    # Enums
    "CompletionPolicy",
    "DocumentStatus",
    "FileBucket",
    "InvitationStatus",
    "OnboardingStatus",
    "PolicyFileType",
    "ResumeStatus",
    "SubscriptionPlan",
    "SubscriptionStatus",
    "TaskCategory",
    "TaskStatus",
    "UserRole",
    # Metadata
    "EmployeeDocumentMetadata",
    "FileMetadata",
    "PolicyMetadata",
    "ResumeMetadata",
    "parse_file_metadata",
    # Entities
    "Company",
    "PolicyTemplate",
    "TaskTemplate",
    "User",
    "Invitation",
    "OnboardingRecord",
    "OnboardingTask",
    "PolicyAcknowledgment",
    "StoredFile",
    "StoredFileChunk",
    "CHUNK_SIZE",
    "OnboardingDocument",
]
