import inspect

import jwt

from company_api.config import settings
from company_api.models.user import User
from company_api.database import SessionLocal
from conftest import PASSWORD, login, register_user


def test_register_and_login(client):
  resp = register_user(client)
  assert resp.status_code == 201, resp.text
  body = resp.json()
  assert body["success"] is True
  assert body["message"] == "User registered successfully. Please verify mobile OTP."
  user_id = body["data"]["user_id"]

  resp = login(client)
  assert resp.status_code == 200, resp.text
  data = resp.json()["data"]
  assert data["user"]["id"] == user_id
  assert data["user"]["email"] == "a@x.com"
  assert data["user"]["first_name"] == "Ada"
  assert data["user"]["last_name"] == "Lovelace"
  assert "password_hash" not in data["user"]

  claims = jwt.decode(data["token"], settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
  assert claims["id"] == user_id
  assert claims["email"] == "a@x.com"
  assert claims["exp"] - claims["iat"] == 90 * 24 * 60 * 60


def test_password_is_stored_hashed(client):
  register_user(client)
  with SessionLocal() as db:
    user = db.query(User).filter(User.email == "a@x.com").one()
  assert user.password_hash != PASSWORD
  assert user.password_hash.startswith("$2")
  assert user.signup_type == "e"
  assert user.is_email_verified is False
  assert user.is_mobile_verified is False


def test_duplicate_email_is_rejected(client):
  assert register_user(client).status_code == 201
  resp = register_user(client, full_name="Someone Else")
  assert resp.status_code == 400
  assert resp.json() == {"success": False, "message": "Email already registered"}


def test_identity_provider_failure_aborts_registration(client, identity):
  from company_api.exceptions import BadRequestError

  def reject(email, password, phone_number=None):
    raise BadRequestError("Identity provider rejected the account: email exists")

  identity.create_user = reject
  resp = register_user(client)
  assert resp.status_code == 400
  assert "email exists" in resp.json()["message"]

  with SessionLocal() as db:
    assert db.query(User).count() == 0


def test_login_failures_share_one_message(client):
  register_user(client)
  wrong_password = login(client, password="Wrong-pass1")
  unknown_email = login(client, email="nobody@x.com")

  assert wrong_password.status_code == 401
  assert unknown_email.status_code == 401
  assert wrong_password.json() == unknown_email.json()
  assert wrong_password.json()["message"] == "Invalid credentials"


def test_register_validation(client):
  resp = register_user(client, password="password")
  assert resp.status_code == 400
  body = resp.json()
  assert body["success"] is False
  assert body["message"] == "Validation failed"
  assert body["details"][0]["field"] == "password"

  assert register_user(client, email="not-an-email").status_code == 400
  assert register_user(client, gender="x").status_code == 400
  assert register_user(client, signup_type="g").status_code == 400
  assert register_user(client, mobile_no="123").status_code == 400


def test_register_strips_markup_from_name(client):
  register_user(client, full_name="<b>Ada</b> Lovelace ")
  data = login(client).json()["data"]
  assert data["user"]["full_name"] == "Ada Lovelace"


def test_verify_email_and_mobile(client):
  user_id = register_user(client).json()["data"]["user_id"]

  resp = client.get("/api/auth/verify-email", params={"user_id": user_id})
  assert resp.status_code == 200, resp.text
  assert resp.json()["success"] is True

  # Any OTP is accepted: codes are not issued yet
  resp = client.post("/api/auth/verify-mobile", json={"user_id": user_id, "otp": "000000"})
  assert resp.status_code == 200, resp.text

  user = login(client).json()["data"]["user"]
  assert user["is_email_verified"] is True
  assert user["is_mobile_verified"] is True


def test_verify_unknown_user(client):
  assert client.get("/api/auth/verify-email", params={"user_id": 999}).status_code == 404
  resp = client.post("/api/auth/verify-mobile", json={"user_id": 999, "otp": "1234"})
  assert resp.status_code == 404
  assert resp.json()["message"] == "User not found"


def test_verify_email_requires_user_id(client):
  resp = client.get("/api/auth/verify-email")
  assert resp.status_code == 400
  assert resp.json()["message"] == "user_id is required"


def test_email_is_stored_as_typed(client):
  resp = register_user(client, email="Ada.Lovelace@X.COM")
  assert resp.status_code == 201, resp.text

  resp = login(client, email="Ada.Lovelace@X.COM")
  assert resp.status_code == 200, resp.text
  assert resp.json()["data"]["user"]["email"] == "Ada.Lovelace@X.COM"
  claims = jwt.decode(resp.json()["data"]["token"], settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
  assert claims["email"] == "Ada.Lovelace@X.COM"

  assert login(client, email="ada.lovelace@x.com").status_code == 401


def test_blocking_handlers_run_in_threadpool():
  # Sync routes are dispatched to FastAPI's threadpool, off the event loop
  from company_api.routers import auth, company, health

  for handler in (
    auth.login,
    auth.verify_email,
    auth.verify_mobile,
    company.register_company,
    company.get_company_profile,
    company.update_company_profile,
    health.readiness_check,
  ):
    assert not inspect.iscoroutinefunction(handler), handler.__name__
