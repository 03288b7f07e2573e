"""
Onboarding Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Role of a user within their company"""

    super_admin = "super_admin"
    company_admin = "company_admin"
    hr_manager = "hr_manager"
    employee = "employee"


class SubscriptionPlan(str, Enum):
    """Company subscription tier"""

    free = "free"
    pro = "pro"
    enterprise = "enterprise"


class SubscriptionStatus(str, Enum):
    """Company subscription status"""

    active = "active"
    cancelled = "cancelled"
    suspended = "suspended"


class InvitationStatus(str, Enum):
    """Invitation status"""

    pending = "pending"
    accepted = "accepted"
    expired = "expired"


class OnboardingStatus(str, Enum):
    """Onboarding record lifecycle"""

    not_started = "not_started"
    in_progress = "in_progress"
    completed = "completed"


class TaskStatus(str, Enum):
    """Checklist task status"""

    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"
    skipped = "skipped"


class TaskCategory(str, Enum):
    """Checklist task category"""

    documentation = "documentation"
    setup = "setup"
    training = "training"
    compliance = "compliance"


class DocumentStatus(str, Enum):
    """Verification status of an employee document"""

    pending = "pending"
    verified = "verified"
    rejected = "rejected"


class ResumeStatus(str, Enum):
    """Review status of an applicant resume"""

    pending = "pending"
    reviewed = "reviewed"
    shortlisted = "shortlisted"
    rejected = "rejected"


class FileBucket(str, Enum):
    """Binary store bucket"""

    policies = "policies"
    employee_documents = "employee-documents"
    resumes = "resumes"


class PolicyFileType(str, Enum):
    """Role of a file inside a policy pair"""

    original = "original"
    extracted_text = "extracted_text"


class CompletionPolicy(str, Enum):
    """Predicate deciding when an onboarding record is completed"""

    single_approved_document = "single_approved_document"
    all_required_items = "all_required_items"
