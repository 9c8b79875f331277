"""Tests for company routes."""

from tests.test_api.conftest import _make_company


class TestListCompanies:
    def test_lists_approved(self, client, mock_company_repo):
        mock_company_repo.list_approved.return_value = [_make_company()]

        resp = client.get("/companies")

        assert resp.status_code == 200
        company = resp.json()[0]
        assert company["name"] == "Example AI"
        assert company["controversies"] == [{"text": "Scraped art", "date": "2024-02-10"}]
        assert "foundedYear" in company

    def test_failure(self, client, mock_company_repo):
        mock_company_repo.list_approved.side_effect = RuntimeError("boom")
        resp = client.get("/companies")
        assert resp.status_code == 500
        assert resp.json()["detail"] == "Failed to fetch companies"


class TestGetCompany:
    def test_found(self, client, mock_company_repo):
        mock_company_repo.get_by_id.return_value = _make_company()
        assert client.get("/companies/company-1").json()["id"] == "company-1"

    def test_missing(self, client):
        resp = client.get("/companies/nope")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Company not found"


class TestCreateCompany:
    def test_cleans_controversies(self, client, mock_company_repo):
        resp = client.post(
            "/companies",
            json={
                "name": "New AI",
                "description": "Yet another lab",
                "controversies": [{"text": "Real"}, {"text": "  "}],
                "citations": {"ceo": [{"url": ""}], "controversies": [{"url": "https://x"}]},
            },
        )

        assert resp.status_code == 201
        company = mock_company_repo.create.call_args.args[0]
        assert company.controversies == [{"text": "Real"}]
        assert company.citations == {}

    def test_missing_name(self, client):
        resp = client.post("/companies", json={"description": "d"})
        assert resp.status_code == 400

    def test_requires_admin_key(self, secured_client):
        resp = secured_client.post("/companies", json={"name": "n", "description": "d"})
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Unauthorized"

    def test_wrong_admin_key(self, secured_client):
        resp = secured_client.post(
            "/companies",
            json={"name": "n", "description": "d"},
            headers={"X-API-KEY": "wrong"},
        )
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Invalid API key"

    def test_correct_admin_key(self, secured_client):
        resp = secured_client.post(
            "/companies",
            json={"name": "n", "description": "d"},
            headers={"X-API-KEY": "admin-secret"},
        )
        assert resp.status_code == 201


class TestUpdateCompany:
    def test_partial_update(self, client, mock_company_repo):
        mock_company_repo.update.return_value = _make_company(ceo=None)

        resp = client.patch("/companies/company-1", json={"ceo": None})

        assert resp.status_code == 200
        mock_company_repo.update.assert_awaited_once_with("company-1", {"ceo": None})

    def test_unknown_company(self, client):
        resp = client.patch("/companies/nope", json={"valuation": "$1B"})
        assert resp.status_code == 404

    def test_clearing_name_is_400(self, client, mock_company_repo):
        mock_company_repo.update.side_effect = ValueError("Column 'name' cannot be cleared")
        resp = client.patch("/companies/company-1", json={"name": None})
        assert resp.status_code == 400


class TestDeleteCompany:
    def test_deleted(self, client):
        assert client.delete("/companies/company-1").json() == {"success": True}

    def test_missing(self, client, mock_company_repo):
        mock_company_repo.delete.return_value = False
        assert client.delete("/companies/nope").status_code == 404


class TestSubmitCompany:
    def test_accepted(self, client, mock_company_submission_repo, metrics):
        resp = client.post(
            "/companies/submit",
            json={
                "name": "Startup AI",
                "description": "Makes chatbots",
                "tags": ["chatbot", "unknown-tag"],
                "submittedBy": "reader@example.org",
            },
        )

        assert resp.status_code == 201
        assert resp.json() == {"success": True, "id": "company-sub-new"}
        submission = mock_company_submission_repo.create.call_args.args[0]
        assert submission.tags == ["chatbot"]
        assert submission.status == "pending"
        assert metrics.submissions_received.labels(kind="company")._value.get() == 1

    def test_missing_fields(self, client):
        resp = client.post("/companies/submit", json={"name": "No description"})
        assert resp.status_code == 400

    def test_invalid_website(self, client):
        resp = client.post(
            "/companies/submit",
            json={"name": "n", "description": "d", "website": "not-a-url"},
        )
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Invalid URL format"
