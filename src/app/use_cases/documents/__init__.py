"""
Document Use Cases

Employee verification documents, company policies and applicant resumes,
all kept in the company-partitioned binary store.
"""

from .dtos import (
    CompanyDocumentResponse,
    DeleteFileResponse,
    FileDownload,
    PolicyListResponse,
    PolicyTextResponse,
    PolicyUploadResponse,
    ResumeResponse,
    ResumeSubmission,
    ReviewDocumentResponse,
    SubmitDocumentResponse,
    UploadedFile,
)
from .employee_documents_use_case import (
    DeleteDocumentUseCase,
    DownloadDocumentUseCase,
    ListMyDocumentsUseCase,
)
from .policy_use_cases import (
    DeletePolicyUseCase,
    DownloadPolicyUseCase,
    GetPolicyTextUseCase,
    ListPoliciesUseCase,
    UploadPolicyUseCase,
)
from .resume_use_cases import (
    DownloadResumeUseCase,
    ListResumesUseCase,
    UpdateResumeUseCase,
    UploadResumeUseCase,
)
from .review_document_use_case import ListCompanyDocumentsUseCase, ReviewDocumentUseCase
from .submit_document_use_case import SubmitDocumentUseCase

__all__ = [
    "SubmitDocumentUseCase",
    "ListMyDocumentsUseCase",
    "DownloadDocumentUseCase",
    "DeleteDocumentUseCase",
    "ListCompanyDocumentsUseCase",
    "ReviewDocumentUseCase",
    "UploadPolicyUseCase",
    "ListPoliciesUseCase",
    "DownloadPolicyUseCase",
    "GetPolicyTextUseCase",
    "DeletePolicyUseCase",
    "UploadResumeUseCase",
    "ListResumesUseCase",
    "DownloadResumeUseCase",
    "UpdateResumeUseCase",
    "CompanyDocumentResponse",
    "DeleteFileResponse",
    "FileDownload",
    "PolicyListResponse",
    "PolicyTextResponse",
    "PolicyUploadResponse",
    "ResumeResponse",
    "ResumeSubmission",
    "ReviewDocumentResponse",
    "SubmitDocumentResponse",
    "UploadedFile",
]
