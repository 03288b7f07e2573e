import pytest

from src.domain.entities import UserRole


@pytest.mark.asyncio
async def test_invite_verify_accept(client, acme, hr, make_user, email_sender):
    _, hr_headers = hr
    invitee_id, invitee_headers = await make_user("new.hire@acme.com", name="New Hire")

    response = await client.post(
        "/api/hr/invite-employee",
        json={
            "name": "New Hire",
            "email": "New.Hire@acme.com",
            "department": "Engineering",
            "position": "Developer",
        },
        headers=hr_headers,
    )
    assert response.status_code == 201
    body = response.json()
    invitation_id = body["invitation"]["id"]
    assert body["invitation"]["email"] == "new.hire@acme.com"
    assert body["invitation"]["status"] == "pending"
    assert body["email_sent"] is True
    assert email_sender.invitations[0].to == "new.hire@acme.com"
    assert email_sender.invitations[0].accept_url.endswith(f"/invitations/{invitation_id}")

    response = await client.post(
        "/api/employee/verify-invitation",
        json={"email": "new.hire@acme.com", "company_id": str(acme)},
        headers=invitee_headers,
    )
    assert response.status_code == 200
    assert response.json()["id"] == invitation_id
    assert response.json()["company_name"] == "Acme Corp"

    response = await client.post(f"/api/invitations/{invitation_id}/accept", headers=invitee_headers)
    assert response.status_code == 200
    accepted = response.json()
    assert accepted["company_id"] == str(acme)
    assert accepted["role"] == "employee"
    assert accepted["department"] == "Engineering"
    assert accepted["onboarding_status"] == "in_progress"

    response = await client.get("/api/user/company-status", headers=invitee_headers)
    assert response.json()["has_company"] is True
    assert response.json()["company_id"] == str(acme)

    response = await client.get("/api/onboarding/progress", headers=invitee_headers)
    assert response.status_code == 200
    assert response.json()["employee_id"] == str(invitee_id)
    assert response.json()["status"] == "in_progress"

    response = await client.post(f"/api/invitations/{invitation_id}/accept", headers=invitee_headers)
    assert response.status_code == 409
    assert response.json() == {
        "success": False,
        "error": "This invitation has already been accepted",
        "code": "INVITATION_ALREADY_ACCEPTED",
    }


@pytest.mark.asyncio
async def test_accept_with_another_email_is_forbidden(client, hr, make_user):
    _, hr_headers = hr
    _, other_headers = await make_user("mallory@evil.com")

    response = await client.post(
        "/api/hr/invite-employee",
        json={"name": "Alice", "email": "alice@acme.com"},
        headers=hr_headers,
    )
    invitation_id = response.json()["invitation"]["id"]

    response = await client.post(f"/api/invitations/{invitation_id}/accept", headers=other_headers)

    assert response.status_code == 403
    assert response.json()["code"] == "EMAIL_MISMATCH"


@pytest.mark.asyncio
async def test_duplicate_pending_invitation_is_a_conflict(client, hr):
    _, hr_headers = hr
    payload = {"name": "Alice", "email": "alice@acme.com"}

    first = await client.post("/api/hr/invite-employee", json=payload, headers=hr_headers)
    second = await client.post("/api/hr/invite-employee", json=payload, headers=hr_headers)

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["code"] == "INVITATION_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_employees_cannot_invite(client, employee):
    _, headers = employee

    response = await client.post(
        "/api/hr/invite-employee",
        json={"name": "Alice", "email": "alice@acme.com"},
        headers=headers,
    )

    assert response.status_code == 403
    assert response.json()["code"] == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
async def test_invalid_invitation_role(client, hr):
    _, hr_headers = hr

    response = await client.post(
        "/api/hr/invite-employee",
        json={"name": "Alice", "email": "alice@acme.com", "role": "company_admin"},
        headers=hr_headers,
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_ROLE"


@pytest.mark.asyncio
async def test_list_and_delete_invitations(client, hr, make_company, make_user):
    _, hr_headers = hr
    globex = await make_company("Globex", "globex.com")
    _, globex_hr_headers = await make_user("hr@globex.com", globex, UserRole.hr_manager)

    response = await client.post(
        "/api/hr/invite-employee",
        json={"name": "Alice", "email": "alice@acme.com"},
        headers=hr_headers,
    )
    invitation_id = response.json()["invitation"]["id"]

    response = await client.get("/api/hr/employee-invitations", headers=hr_headers)
    assert [i["id"] for i in response.json()] == [invitation_id]

    response = await client.get("/api/hr/employee-invitations", headers=globex_hr_headers)
    assert response.json() == []

    response = await client.delete(
        f"/api/hr/employee-invitations/{invitation_id}", headers=globex_hr_headers
    )
    assert response.status_code == 404

    response = await client.delete(f"/api/hr/employee-invitations/{invitation_id}", headers=hr_headers)
    assert response.status_code == 200

    response = await client.get(f"/api/hr/employee-invitations/{invitation_id}", headers=hr_headers)
    assert response.status_code == 404
    assert response.json()["code"] == "INVITATION_NOT_FOUND"


@pytest.mark.asyncio
async def test_check_and_accept_invitation(client, hr, make_user):
    _, hr_headers = hr
    await client.post(
        "/api/hr/invite-employee",
        json={"name": "Carol", "email": "carol@acme.com", "role": "hr_manager"},
        headers=hr_headers,
    )
    _, carol_headers = await make_user("carol@acme.com")

    response = await client.post("/api/user/check-and-accept-invitation", headers=carol_headers)

    assert response.status_code == 200
    assert response.json()["role"] == "hr_manager"
    assert response.json()["onboarding_status"] == "in_progress"

    response = await client.post("/api/user/check-and-accept-invitation", headers=carol_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_invitation_status(client, hr, make_user):
    _, hr_headers = hr
    _, dan_headers = await make_user("dan@acme.com")

    response = await client.get("/api/user/invitation-status", headers=dan_headers)
    assert response.status_code == 200
    assert response.json() == {"has_invitation": False, "invitation": None}

    await client.post(
        "/api/hr/invite-employee",
        json={"name": "Dan", "email": "dan@acme.com", "role": "employee"},
        headers=hr_headers,
    )

    response = await client.get("/api/user/invitation-status", headers=dan_headers)
    body = response.json()
    assert body["has_invitation"] is True
    assert body["invitation"]["email"] == "dan@acme.com"
    assert body["invitation"]["company_name"] == "Acme Corp"

    await client.post("/api/user/check-and-accept-invitation", headers=dan_headers)

    response = await client.get("/api/user/invitation-status", headers=dan_headers)
    assert response.json()["has_invitation"] is False
