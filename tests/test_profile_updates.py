from company_api.services.company_profiles import build_update_set


def update(client, headers, payload):
  return client.put("/api/company/profile", json=payload, headers=headers)


def test_update_without_profile_is_not_found(client, auth_headers):
  resp = update(client, auth_headers, {"description": "New"})
  assert resp.status_code == 404
  assert resp.json() == {
    "success": False,
    "message": "Company profile not found. Please create a profile first.",
  }


def test_partial_update_changes_only_sent_fields(client, auth_headers, company):
  resp = update(client, auth_headers, {"description": "  Rockets and <i>anvils</i> ", "founded_date": "2019-01-01"})
  assert resp.status_code == 200, resp.text
  body = resp.json()
  assert body["message"] == "Company updated"
  data = body["data"]
  assert data["description"] == "Rockets and anvils"
  assert data["founded_date"] == "2019-01-01"
  assert data["company_name"] == company["company_name"]
  assert data["website"] == company["website"]
  assert data["social_links"] == company["social_links"]


def test_null_and_blank_values_are_ignored(client, auth_headers, company):
  resp = update(client, auth_headers, {"website": None, "description": "   ", "company_name": None})
  assert resp.status_code == 200, resp.text
  data = resp.json()["data"]
  assert data["website"] == "https://acme.io"
  assert data["description"] == "We make everything."
  assert data["company_name"] == "Acme Corp"


def test_empty_update_returns_current_profile(client, auth_headers, company):
  resp = update(client, auth_headers, {})
  assert resp.status_code == 200
  assert resp.json()["data"]["id"] == company["id"]


def test_clearing_one_social_link_keeps_the_others(client, auth_headers, company):
  resp = update(client, auth_headers, {"social_links": {"twitter": ""}})
  assert resp.status_code == 200, resp.text
  links = resp.json()["data"]["social_links"]
  assert links["twitter"] == ""
  assert links["linkedin"] == "https://linkedin.com/company/acme"


def test_adding_a_social_link_merges(client, auth_headers, company):
  resp = update(client, auth_headers, {"social_links": {"instagram": "https://instagram.com/acme"}})
  links = resp.json()["data"]["social_links"]
  assert links == {
    "linkedin": "https://linkedin.com/company/acme",
    "twitter": "https://twitter.com/acme",
    "instagram": "https://instagram.com/acme",
  }


def test_same_update_twice_is_idempotent(client, auth_headers, company):
  payload = {"city": "Shelbyville", "social_links": {"facebook": "https://facebook.com/acme"}}
  first = update(client, auth_headers, payload).json()["data"]
  second = update(client, auth_headers, payload).json()["data"]
  first.pop("updated_at")
  second.pop("updated_at")
  assert first == second


def test_update_validation(client, auth_headers, company):
  assert update(client, auth_headers, {"company_name": "A"}).status_code == 400
  assert update(client, auth_headers, {"website": "ftp//acme"}).status_code == 400
  assert update(client, auth_headers, {"mission": "m" * 1001}).status_code == 400
  assert update(client, auth_headers, {"description": "a" * 2001}).status_code == 400
  assert update(client, auth_headers, {"website": "not-a-url"}).status_code == 400

  data = client.get("/api/company/profile", headers=auth_headers).json()["data"]
  assert data["company_name"] == "Acme Corp"


def test_blank_stored_email_is_shown_as_account_email(client, auth_headers, company):
  from company_api.database import SessionLocal
  from company_api.models.company import CompanyProfile

  with SessionLocal() as db:
    db.query(CompanyProfile).filter(CompanyProfile.id == company["id"]).update({"email": ""})
    db.commit()

  data = client.get("/api/company/profile", headers=auth_headers).json()["data"]
  assert data["email"] == "a@x.com"

  with SessionLocal() as db:
    assert db.get(CompanyProfile, company["id"]).email == ""


def test_build_update_set():
  updates = build_update_set({
    "company_name": " <b>Acme</b> ",
    "website": None,
    "description": "",
    "founded_date": "2001-01-01",
    "social_links": {"twitter": "", "linkedin": " https://linkedin.com/x "},
  })
  assert updates == {
    "company_name": "Acme",
    "founded_date": "2001-01-01",
    "social_links": {"twitter": "", "linkedin": "https://linkedin.com/x"},
  }
