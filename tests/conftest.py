import os

# Must be set before company_api is imported: settings and the engine are
# built at import time.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["USE_MOCK_AUTH"] = "true"
os.environ["ASSET_PROVIDER"] = "mock"
os.environ["JWT_SECRET"] = "test-secret-with-enough-bytes-for-hs256"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from company_api import models  # noqa: F401  registers the tables
from company_api.database import Base, engine
from company_api.dependencies import get_asset_uploader, get_identity_provider
from company_api.main import app
from company_api.services.assets import MockAssetUploader
from company_api.services.identity import StubIdentityProvider

PASSWORD = "Passw0rd!"


@pytest.fixture(autouse=True)
def reset_db():
  Base.metadata.drop_all(bind=engine)
  Base.metadata.create_all(bind=engine)
  yield
  app.dependency_overrides.clear()


@pytest.fixture
def uploader():
  mock = MockAssetUploader()
  app.dependency_overrides[get_asset_uploader] = lambda: mock
  return mock


@pytest.fixture
def identity():
  stub = StubIdentityProvider()
  app.dependency_overrides[get_identity_provider] = lambda: stub
  return stub


@pytest.fixture
def client(uploader, identity):
  return TestClient(app, raise_server_exceptions=False)


def register_user(client, email="a@x.com", password=PASSWORD, **overrides):
  payload = {
    "email": email,
    "password": password,
    "full_name": "Ada Lovelace",
    "gender": "f",
    "mobile_no": "+15551234567",
    "signup_type": "e",
  }
  payload.update(overrides)
  return client.post("/api/auth/register", json=payload)


def login(client, email="a@x.com", password=PASSWORD):
  return client.post("/api/auth/login", json={"email": email, "password": password})


def auth_headers_for(client, email="a@x.com"):
  resp = register_user(client, email=email)
  assert resp.status_code == 201, resp.text
  resp = login(client, email=email)
  assert resp.status_code == 200, resp.text
  return {"Authorization": f"Bearer {resp.json()['data']['token']}"}


@pytest.fixture
def auth_headers(client):
  return auth_headers_for(client)


def company_payload(**overrides):
  payload = {
    "company_name": "Acme Corp",
    "address": "1 Main Street",
    "city": "Springfield",
    "state": "Illinois",
    "country": "USA",
    "postal_code": "62701",
    "industry": "Technology",
    "website": "https://acme.io",
    "description": "We make everything.",
    "social_links": {
      "linkedin": "https://linkedin.com/company/acme",
      "twitter": "https://twitter.com/acme",
    },
  }
  payload.update(overrides)
  return payload


@pytest.fixture
def company(client, auth_headers):
  resp = client.post("/api/company/register", json=company_payload(), headers=auth_headers)
  assert resp.status_code == 201, resp.text
  return resp.json()["data"]
