import pytest

from src.domain.entities import UserRole


async def _apply(client, company_id, data=b"%PDF-1.4 resume", content_type="application/pdf"):
    return await client.post(
        "/api/resumes/upload",
        data={
            "company_id": str(company_id),
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "position": "Engineer",
        },
        files={"file": ("ada.pdf", data, content_type)},
    )


@pytest.mark.asyncio
async def test_public_resume_upload_and_review(client, acme, hr):
    _, hr_headers = hr

    response = await _apply(client, acme)
    assert response.status_code == 201
    resume_id = response.json()["id"]
    assert response.json()["status"] == "pending"

    response = await client.get("/api/resumes", headers=hr_headers)
    assert [r["id"] for r in response.json()] == [resume_id]

    response = await client.get(f"/api/resumes/{resume_id}", headers=hr_headers)
    assert response.content == b"%PDF-1.4 resume"

    response = await client.put(
        f"/api/resumes/{resume_id}",
        json={"status": "shortlisted", "notes": "Call back"},
        headers=hr_headers,
    )
    assert response.status_code == 200
    assert response.json()["status"] == "shortlisted"
    assert response.json()["reviewed_by"] == "Helen HR"


@pytest.mark.asyncio
async def test_resume_rules(client, acme, make_company, make_user, employee):
    _, employee_headers = employee

    response = await _apply(client, acme, content_type="image/png")
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_FILE_TYPE"

    closed = await make_company("Closed Co", "closed.co", is_active=False)
    response = await _apply(client, closed)
    assert response.status_code == 404

    response = await client.get("/api/resumes", headers=employee_headers)
    assert response.status_code == 403

    globex = await make_company("Globex", "globex.com")
    _, globex_hr_headers = await make_user("hr@globex.com", globex, UserRole.hr_manager)
    resume_id = (await _apply(client, acme)).json()["id"]
    response = await client.get(f"/api/resumes/{resume_id}", headers=globex_hr_headers)
    assert response.status_code == 404
