"""
Test configuration and fixtures for ReState.
Provides an in-memory Appwrite backend served through httpx.MockTransport,
service fixtures and document factories.
"""

import pytest
import json
import random
import uuid
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Set
from fastapi import Header
from fastapi.testclient import TestClient
import httpx

from restate.appwrite import AppwriteClient, create_client
from restate.config import Settings
from restate.main import app
from restate.services.auth import AuthService
from restate.services.property import PropertyService
from restate.services.seed import SeedService
from restate.utils.dependencies import get_app_settings, get_appwrite_client, get_server_appwrite_client


TEST_ENDPOINT = "https://appwrite.test/v1"
TEST_PROJECT = "test-project"
TEST_DATABASE = "test-db"
TEST_API_KEY = "test-api-key"


def _error(status_code: int, message: str, type: str) -> httpx.Response:
    return httpx.Response(
        status_code,
        json={"message": message, "code": status_code, "type": type, "version": "1.5.7"},
    )


class FakeAppwrite:
    """
    In-memory stand-in for the Appwrite REST API.

    Implements the document, account and health endpoints the app calls.
    `missing_attributes` makes equality queries on the named attributes fail
    the way Appwrite does for attributes absent from a collection schema;
    `failing` forces a 500 for (method, collection) pairs.
    """

    DEFAULT_LIMIT = 25

    def __init__(self, project: str = TEST_PROJECT, database_id: str = TEST_DATABASE):
        self.project = project
        self.database_id = database_id
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = defaultdict(dict)
        self.missing_attributes: Dict[str, Set[str]] = defaultdict(set)
        self.failing: Set[tuple] = set()
        self.users: Dict[str, Dict[str, Any]] = {}
        self.tokens: Dict[str, str] = {}
        self.sessions: Dict[str, str] = {}
        self.requests: List[httpx.Request] = []
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    # Test data helpers

    def _tick(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat().replace("+00:00", "Z")

    def add_document(self, collection: str, data: Dict[str, Any], document_id: Optional[str] = None) -> Dict[str, Any]:
        document_id = document_id or uuid.uuid4().hex[:20]
        timestamp = self._tick()
        document = {
            "$id": document_id,
            "$createdAt": timestamp,
            "$updatedAt": timestamp,
            "$collectionId": collection,
            "$databaseId": self.database_id,
            "$permissions": [],
            **data,
        }
        self.collections[collection][document_id] = document
        return document

    def documents(self, collection: str) -> List[Dict[str, Any]]:
        return list(self.collections[collection].values())

    def add_user(self, user_id: str = "user-1", name: str = "Jane Doe", email: str = "jane@example.com") -> Dict[str, Any]:
        user = {"$id": user_id, "name": name, "email": email, "status": True}
        self.users[user_id] = user
        return user

    def issue_token(self, user_id: str) -> str:
        secret = uuid.uuid4().hex
        self.tokens[secret] = user_id
        return secret

    def open_session(self, user_id: str) -> str:
        secret = uuid.uuid4().hex
        self.sessions[secret] = user_id
        return secret

    # Request handling

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.headers.get("X-Appwrite-Project") != self.project:
            return _error(404, "Project not found", "project_not_found")

        path = request.url.path
        if path.startswith("/v1"):
            path = path[len("/v1"):]
        parts = [part for part in path.split("/") if part]

        if parts == ["health", "version"]:
            return httpx.Response(200, json={"version": "1.5.7"})
        if parts and parts[0] == "account":
            return self._handle_account(request, parts[1:])
        if len(parts) >= 5 and parts[0] == "databases" and parts[2] == "collections" and parts[4] == "documents":
            if parts[1] != self.database_id:
                return _error(404, "Database not found", "database_not_found")
            return self._handle_documents(request, parts[3], parts[5] if len(parts) > 5 else None)

        return _error(404, "Route not found", "general_route_not_found")

    def _handle_documents(self, request: httpx.Request, collection: str, document_id: Optional[str]) -> httpx.Response:
        if (request.method, collection) in self.failing:
            return _error(500, "Server Error", "general_unknown")

        store = self.collections[collection]

        if request.method == "GET" and document_id is None:
            queries = [json.loads(q) for q in request.url.params.get_list("queries[]")]
            return self._list(collection, queries)

        if request.method == "GET":
            if document_id not in store:
                return _error(404, "Document with the requested ID could not be found.", "document_not_found")
            return httpx.Response(200, json=store[document_id])

        if request.method == "POST":
            body = json.loads(request.content)
            new_id = body["documentId"]
            if new_id == "unique()":
                new_id = uuid.uuid4().hex[:20]
            if new_id in store:
                return _error(409, "Document with the requested ID already exists.", "document_already_exists")
            return httpx.Response(201, json=self.add_document(collection, body["data"], new_id))

        if request.method == "DELETE":
            if document_id not in store:
                return _error(404, "Document with the requested ID could not be found.", "document_not_found")
            del store[document_id]
            return httpx.Response(204)

        return _error(405, "Method not allowed", "general_not_implemented")

    def _list(self, collection: str, queries: List[Dict[str, Any]]) -> httpx.Response:
        documents = self.documents(collection)
        limit = self.DEFAULT_LIMIT

        for query in queries:
            method = query["method"]
            attribute = query.get("attribute")
            values = query.get("values", [])

            if attribute in self.missing_attributes[collection]:
                return _error(
                    400,
                    f"Invalid query: Attribute not found in schema: {attribute}",
                    "general_query_invalid",
                )

            if method == "equal":
                documents = [doc for doc in documents if self._matches(doc.get(attribute), values)]
            elif method == "contains":
                documents = [
                    doc for doc in documents
                    if any(str(value) in (doc.get(attribute) or "") for value in values)
                ]
            elif method == "orderAsc":
                documents = sorted(documents, key=lambda doc: doc.get(attribute))
            elif method == "orderDesc":
                documents = sorted(documents, key=lambda doc: doc.get(attribute), reverse=True)
            elif method == "limit":
                limit = values[0]
            else:
                return _error(400, f"Invalid query method: {method}", "general_query_invalid")

        return httpx.Response(200, json={"total": len(documents), "documents": documents[:limit]})

    @staticmethod
    def _matches(actual: Any, values: List[Any]) -> bool:
        if isinstance(actual, dict):
            actual = actual.get("$id")
        if isinstance(actual, list):
            return any(value in actual for value in values)
        return actual in values

    def _handle_account(self, request: httpx.Request, parts: List[str]) -> httpx.Response:
        session = request.headers.get("X-Appwrite-Session")

        if request.method == "GET" and parts == []:
            if session not in self.sessions:
                return _error(401, "User (role: guests) missing scope (account)", "general_unauthorized_scope")
            return httpx.Response(200, json=self.users[self.sessions[session]])

        if request.method == "POST" and parts == ["sessions", "token"]:
            body = json.loads(request.content)
            if self.tokens.get(body.get("secret")) != body.get("userId"):
                return _error(401, "Invalid token passed in the request.", "user_invalid_token")
            del self.tokens[body["secret"]]
            secret = self.open_session(body["userId"])
            # The secret is only disclosed to API-key requests; others get a cookie
            headers = {}
            if not request.headers.get("X-Appwrite-Key"):
                headers["set-cookie"] = f"a_session_{self.project}={secret}; path=/"
                secret = ""
            return httpx.Response(201, headers=headers, json={
                "$id": uuid.uuid4().hex[:20],
                "$createdAt": self._tick(),
                "userId": body["userId"],
                "provider": "oauth2",
                "expire": "2025-01-01T00:00:00.000+00:00",
                "secret": secret,
            })

        if request.method == "DELETE" and parts == ["sessions", "current"]:
            if session not in self.sessions:
                return _error(401, "User (role: guests) missing scope (account)", "general_unauthorized_scope")
            del self.sessions[session]
            return httpx.Response(204)

        return _error(404, "Route not found", "general_route_not_found")


@pytest.fixture
def test_settings() -> Settings:
    """Settings pointing at the fake backend."""
    return Settings(
        environment="testing",
        appwrite_endpoint=TEST_ENDPOINT,
        appwrite_project_id=TEST_PROJECT,
        appwrite_api_key=TEST_API_KEY,
        appwrite_database_id=TEST_DATABASE,
        appwrite_agents_collection_id="agents",
        appwrite_reviews_collection_id="reviews",
        appwrite_galleries_collection_id="galleries",
        appwrite_properties_collection_id="properties",
        oauth_redirect_url="http://localhost:8000/api/v1/auth/callback",
    )


@pytest.fixture
def fake_appwrite() -> FakeAppwrite:
    return FakeAppwrite()


@pytest.fixture
def client_factory(fake_appwrite: FakeAppwrite):
    """create_client bound to the fake backend."""
    def _factory(config: Settings, **kwargs) -> AppwriteClient:
        return create_client(config, transport=fake_appwrite.transport(), **kwargs)
    return _factory


@pytest.fixture
async def appwrite_client(test_settings: Settings, client_factory):
    client = client_factory(test_settings)
    yield client
    await client.close()


@pytest.fixture
def property_service(appwrite_client: AppwriteClient, test_settings: Settings) -> PropertyService:
    return PropertyService(appwrite_client, test_settings)


@pytest.fixture
async def server_client(test_settings: Settings, client_factory):
    """Client sending the project API key."""
    client = client_factory(test_settings, use_api_key=True)
    yield client
    await client.close()


@pytest.fixture
def auth_service(appwrite_client: AppwriteClient, server_client: AppwriteClient, test_settings: Settings) -> AuthService:
    return AuthService(appwrite_client, test_settings, server_client=server_client)


@pytest.fixture
def seed_service(server_client: AppwriteClient, test_settings: Settings) -> SeedService:
    return SeedService(server_client, test_settings, rng=random.Random(1234))


@pytest.fixture
def client(fake_appwrite: FakeAppwrite, test_settings: Settings) -> TestClient:
    """Create a test client whose Appwrite calls go to the fake backend."""
    async def override_get_appwrite_client(
        x_appwrite_session: Optional[str] = Header(None, alias="X-Appwrite-Session")
    ):
        appwrite = create_client(test_settings, session=x_appwrite_session, transport=fake_appwrite.transport())
        try:
            yield appwrite
        finally:
            await appwrite.close()

    async def override_get_server_appwrite_client():
        appwrite = create_client(test_settings, use_api_key=True, transport=fake_appwrite.transport())
        try:
            yield appwrite
        finally:
            await appwrite.close()

    app.dependency_overrides[get_app_settings] = lambda: test_settings
    app.dependency_overrides[get_appwrite_client] = override_get_appwrite_client
    app.dependency_overrides[get_server_appwrite_client] = override_get_server_appwrite_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# Test data factories
class AgentFactory:
    """Factory for agent documents."""

    @staticmethod
    def create_agent(fake: FakeAppwrite, name: str = "Agent 1", email: str = "agent1@example.com") -> Dict[str, Any]:
        return fake.add_document("agents", {
            "name": name,
            "email": email,
            "avatar": "https://i.pravatar.cc/300?img=3",
        })


class PropertyFactory:
    """Factory for property documents, stored with the collection's attribute names."""

    @staticmethod
    def create_property(
        fake: FakeAppwrite,
        name: str = "Property 1",
        property_type: str = "House",
        agent_id: str = "agent-1",
        **overrides: Any
    ) -> Dict[str, Any]:
        data = {
            "name": name,
            "properties": property_type,
            "description": f"This is the description for {name}.",
            "address": "123 Property Street, City 1",
            "geolocation": "192.168.1.1, 192.168.1.1",
            "price": 2500,
            "area": 1200,
            "bedrooms": 3,
            "bathrooms": 2,
            "rating": 4,
            "facillites": ["Parking", "Gym"],
            "image": "https://picsum.photos/seed/restate-property-1/1200/800",
            "agent": agent_id,
        }
        data.update(overrides)
        return fake.add_document("properties", data)


class ReviewFactory:
    """Factory for review documents."""

    @staticmethod
    def create_review(fake: FakeAppwrite, property_id: str, rating: int = 5, text: str = "Great place to live.") -> Dict[str, Any]:
        return fake.add_document("reviews", {
            "name": "Reviewer 7",
            "avatar": "https://i.pravatar.cc/150?img=5",
            "review": text,
            "rating": rating,
            "property": property_id,
        })


class GalleryFactory:
    """Factory for gallery documents."""

    @staticmethod
    def create_gallery(fake: FakeAppwrite, image: str = "https://picsum.photos/seed/g/800/600", property_id: Optional[str] = None) -> Dict[str, Any]:
        data: Dict[str, Any] = {"image": image}
        if property_id is not None:
            data["property"] = property_id
        return fake.add_document("galleries", data)
