from datetime import datetime
from uuid import uuid4

import pytest

from src.app.services.onboarding_progress import (
    apply_completion,
    completion_holds,
    resolve_completion_policy,
    seed_checklist,
    start_record,
)
from src.domain.entities import (
    Company,
    CompletionPolicy,
    DocumentStatus,
    OnboardingDocument,
    OnboardingRecord,
    OnboardingStatus,
    OnboardingTask,
    PolicyAcknowledgment,
    TaskStatus,
)


def _record(status=OnboardingStatus.in_progress):
    return OnboardingRecord(id=uuid4(), employee_id=uuid4(), company_id=uuid4(), status=status)


def _task(task_id, required=True, status=TaskStatus.pending):
    return OnboardingTask(
        record_id=uuid4(), task_id=task_id, title=task_id, required=required, status=status
    )


def _policy(name, required=True, acknowledged=False):
    return PolicyAcknowledgment(
        record_id=uuid4(), policy_name=name, required=required, acknowledged=acknowledged
    )


def _document(status):
    return OnboardingDocument(
        record_id=uuid4(),
        company_id=uuid4(),
        employee_id=uuid4(),
        file_id=uuid4(),
        document_type="id_proof",
        filename="id.pdf",
        content_type="application/pdf",
        size=10,
        status=status,
    )


def test_resolve_completion_policy():
    assert resolve_completion_policy("all_required_items") == CompletionPolicy.all_required_items
    assert (
        resolve_completion_policy(" Single_Approved_Document ")
        == CompletionPolicy.single_approved_document
    )
    with pytest.raises(ValueError):
        resolve_completion_policy("whatever")


def test_single_approved_document_needs_a_verified_document():
    policy = CompletionPolicy.single_approved_document
    assert not completion_holds(policy, [], [], [_document(DocumentStatus.pending)])
    assert not completion_holds(policy, [], [], [_document(DocumentStatus.rejected)])
    assert completion_holds(
        policy,
        [_task("t1")],
        [_policy("p1")],
        [_document(DocumentStatus.rejected), _document(DocumentStatus.verified)],
    )


def test_all_required_items_ignores_optional_ones():
    policy = CompletionPolicy.all_required_items
    tasks = [_task("t1", status=TaskStatus.completed), _task("t2", required=False)]
    policies = [_policy("p1", acknowledged=True), _policy("p2", required=False)]
    assert completion_holds(policy, tasks, policies, [])

    tasks.append(_task("t3"))
    assert not completion_holds(policy, tasks, policies, [])


def test_apply_completion_is_monotonic():
    now = datetime.utcnow()
    record = _record()

    changed = apply_completion(
        record,
        CompletionPolicy.single_approved_document,
        [],
        [],
        [_document(DocumentStatus.verified)],
        now,
    )
    assert changed is True
    assert record.status == OnboardingStatus.completed
    assert record.completed_at == now

    # Later evidence against completion never reopens the record
    changed = apply_completion(
        record,
        CompletionPolicy.all_required_items,
        [_task("t1")],
        [],
        [_document(DocumentStatus.rejected)],
        datetime.utcnow(),
    )
    assert changed is False
    assert record.status == OnboardingStatus.completed
    assert record.completed_at == now


def test_start_record_only_moves_not_started():
    now = datetime.utcnow()
    record = _record(OnboardingStatus.not_started)
    assert start_record(record, now) is True
    assert record.status == OnboardingStatus.in_progress
    assert record.started_at == now

    assert start_record(record, datetime.utcnow()) is False
    assert record.started_at == now


def test_seed_checklist_follows_template_order():
    company = Company(
        id=uuid4(),
        name="Acme",
        domain="acme.com",
        contact_email="hr@acme.com",
        onboarding_tasks=[
            {"id": "laptop", "title": "Collect laptop", "order": 2},
            {"id": "profile", "title": "Fill profile", "order": 1, "required": False},
        ],
        onboarding_policies=[{"name": "Code of Conduct", "url": "https://acme.com/coc"}],
    )
    record = _record()

    tasks, policies = seed_checklist(record, company)

    assert [t.task_id for t in tasks] == ["profile", "laptop"]
    assert [t.position for t in tasks] == [0, 1]
    assert tasks[0].required is False
    assert all(t.record_id == record.id for t in tasks)
    assert [p.policy_name for p in policies] == ["Code of Conduct"]
    assert policies[0].acknowledged is False
