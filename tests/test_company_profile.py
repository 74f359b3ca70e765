import html
from datetime import timedelta

import pytest

from company_api.security import create_access_token
from conftest import auth_headers_for, company_payload


def test_create_and_get_profile(client, auth_headers):
  resp = client.post("/api/company/register", json=company_payload(), headers=auth_headers)
  assert resp.status_code == 201, resp.text
  body = resp.json()
  assert body["success"] is True
  assert body["message"] == "Company created"
  created = body["data"]
  assert created["company_name"] == "Acme Corp"
  assert created["social_links"]["linkedin"] == "https://linkedin.com/company/acme"
  assert created["logo_url"] is None

  resp = client.get("/api/company/profile", headers=auth_headers)
  assert resp.status_code == 200
  fetched = resp.json()["data"]
  assert fetched["id"] == created["id"]
  assert fetched["owner_id"] == created["owner_id"]
  assert fetched["city"] == "Springfield"


def test_profile_is_null_before_creation(client, auth_headers):
  resp = client.get("/api/company/profile", headers=auth_headers)
  assert resp.status_code == 200
  assert resp.json()["success"] is True
  assert resp.json()["data"] is None


def test_email_defaults_to_account_email(client, auth_headers):
  resp = client.post("/api/company/register", json=company_payload(), headers=auth_headers)
  assert resp.json()["data"]["email"] == "a@x.com"


def test_explicit_email_is_kept(client, auth_headers):
  resp = client.post(
    "/api/company/register",
    json=company_payload(email="hello@acme.io"),
    headers=auth_headers
  )
  assert resp.json()["data"]["email"] == "hello@acme.io"


def test_second_profile_is_rejected(client, auth_headers, company):
  resp = client.post(
    "/api/company/register",
    json=company_payload(company_name="Other Corp"),
    headers=auth_headers
  )
  assert resp.status_code == 400
  assert resp.json()["message"] == "Company already exists for this user"


def test_fields_are_trimmed_and_sanitized(client, auth_headers):
  payload = company_payload(
    company_name="  <script>alert(1)</script>Acme <b>Corp</b>  ",
    city="  Springfield ",
    description="Smith & Co <img src=x onerror=alert(1)>",
  )
  resp = client.post("/api/company/register", json=payload, headers=auth_headers)
  assert resp.status_code == 201, resp.text

  data = client.get("/api/company/profile", headers=auth_headers).json()["data"]
  assert data["company_name"] == "Acme Corp"
  assert data["city"] == "Springfield"
  assert data["description"] == "Smith & Co"


def test_required_field_that_is_only_markup(client, auth_headers):
  resp = client.post(
    "/api/company/register",
    json=company_payload(company_name="<b></b>"),
    headers=auth_headers
  )
  assert resp.status_code == 400
  assert resp.json()["details"][0]["field"] == "company_name"


def test_blank_optional_fields_are_stored_as_null(client, auth_headers):
  resp = client.post(
    "/api/company/register",
    json=company_payload(website="", founded_date="", phone="  "),
    headers=auth_headers
  )
  assert resp.status_code == 201, resp.text
  data = resp.json()["data"]
  assert data["website"] is None
  assert data["founded_date"] is None
  assert data["phone"] is None


def test_validation_limits(client, auth_headers):
  long_description = client.post(
    "/api/company/register",
    json=company_payload(description="x" * 2001),
    headers=auth_headers
  )
  assert long_description.status_code == 400
  assert long_description.json()["details"][0]["field"] == "description"

  bad_website = client.post(
    "/api/company/register",
    json=company_payload(website="not-a-url"),
    headers=auth_headers
  )
  assert bad_website.status_code == 400

  missing_name = company_payload()
  del missing_name["company_name"]
  assert client.post("/api/company/register", json=missing_name, headers=auth_headers).status_code == 400

  bad_email = client.post(
    "/api/company/register",
    json=company_payload(email="nope"),
    headers=auth_headers
  )
  assert bad_email.status_code == 400

  unknown_platform = client.post(
    "/api/company/register",
    json=company_payload(social_links={"myspace": "https://myspace.com/acme"}),
    headers=auth_headers
  )
  assert unknown_platform.status_code == 400


def test_boundary_lengths_are_accepted(client, auth_headers):
  resp = client.post(
    "/api/company/register",
    json=company_payload(description="x" * 2000, website="http://localhost:3000"),
    headers=auth_headers
  )
  assert resp.status_code == 201, resp.text


def test_profiles_are_per_user(client, auth_headers, company):
  other = auth_headers_for(client, email="b@acme.io")
  resp = client.get("/api/company/profile", headers=other)
  assert resp.json()["data"] is None

  resp = client.post("/api/company/register", json=company_payload(company_name="Beta"), headers=other)
  assert resp.status_code == 201
  assert resp.json()["data"]["id"] != company["id"]


def test_company_routes_require_token(client):
  resp = client.get("/api/company/profile")
  assert resp.status_code == 401
  assert resp.json() == {"success": False, "message": "Missing Authorization token"}


def test_invalid_and_expired_tokens(client):
  resp = client.get("/api/company/profile", headers={"Authorization": "Bearer not-a-jwt"})
  assert resp.status_code == 401
  assert resp.json()["message"] == "Invalid or expired token"

  expired = create_access_token(1, "a@x.com", expires_delta=timedelta(seconds=-10))
  resp = client.get("/api/company/profile", headers={"Authorization": f"Bearer {expired}"})
  assert resp.status_code == 401
  assert resp.json()["message"] == "Invalid or expired token"


def _encode(text, times):
  for _ in range(times):
    text = html.escape(text)
  return text


@pytest.mark.parametrize("levels", [1, 5, 6, 10])
def test_entity_encoded_markup_is_stripped(client, auth_headers, levels):
  description = _encode("<img src=x onerror=alert(1)>Acme", levels)
  resp = client.post(
    "/api/company/register",
    json=company_payload(description=description),
    headers=auth_headers
  )
  assert resp.status_code == 201, resp.text
  assert resp.json()["data"]["description"] == "Acme"


def test_sanitize_keeps_plain_text():
  from company_api.sanitize import sanitize

  assert sanitize("  Smith & Co  ") == "Smith & Co"
  assert sanitize("a < b") == "a < b"
  assert sanitize(_encode("<script>x</script>hi", 7)) == "hi"
