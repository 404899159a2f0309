"""Tests for the server-rendered user pages."""

import pytest
from httpx import AsyncClient


def form_data(**overrides):
    data = {
        "forename": "Sam",
        "surname": "Witwicky",
        "email": "switwicky@example.com",
        "is_active": "true",
        "date_of_birth": "1990-06-15",
    }
    data.update(overrides)
    return data


@pytest.mark.asyncio
async def test_root_redirects_to_users(client: AsyncClient):
    response = await client.get("/")

    assert response.status_code == 303
    assert response.headers["location"] == "/users"


class TestListPage:
    """GET /users."""

    @pytest.mark.asyncio
    async def test_lists_every_user(self, client: AsyncClient, seeded_users):
        response = await client.get("/users")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "ploew@example.com" in response.text
        assert "ctroy@example.com" in response.text

    @pytest.mark.asyncio
    async def test_active_filter(self, client: AsyncClient, seeded_users):
        response = await client.get("/users", params={"isActive": "false"})

        assert "ctroy@example.com" in response.text
        assert "ploew@example.com" not in response.text


class TestAddPage:
    """GET and POST /users/add."""

    @pytest.mark.asyncio
    async def test_form_renders(self, client: AsyncClient):
        response = await client.get("/users/add")

        assert response.status_code == 200
        assert 'name="forename"' in response.text

    @pytest.mark.asyncio
    async def test_valid_form_redirects(self, client: AsyncClient, seeded_users):
        response = await client.post("/users/add", data=form_data())

        assert response.status_code == 303
        assert response.headers["location"] == "/users"

        users = (await client.get("/api/users")).json()
        created = users[-1]
        assert created["email"] == "switwicky@example.com"
        assert created["is_active"] is True
        assert created["date_of_birth"] == "1990-06-15"

    @pytest.mark.asyncio
    async def test_unchecked_box_means_inactive(self, client: AsyncClient, seeded_users):
        data = form_data()
        del data["is_active"]

        await client.post("/users/add", data=data)

        users = (await client.get("/api/users")).json()
        assert users[-1]["is_active"] is False

    @pytest.mark.asyncio
    async def test_invalid_form_rerenders(self, client: AsyncClient, seeded_users):
        response = await client.post(
            "/users/add", data=form_data(forename="", date_of_birth="2999-01-01")
        )

        assert response.status_code == 400
        assert "Date of Birth cannot be in the future." in response.text
        # Submitted values are kept
        assert "switwicky@example.com" in response.text
        assert len((await client.get("/api/users")).json()) == 11


class TestDetailsPage:
    """GET /users/{id}."""

    @pytest.mark.asyncio
    async def test_shows_user_and_trail(self, client: AsyncClient, seeded_users):
        await client.put(
            "/api/users/4",
            json={"id": 4, "forename": "Memphis", "surname": "Raines", "email": "memphis@example.com"},
        )

        response = await client.get("/users/4")

        assert response.status_code == 200
        assert "Memphis Raines" in response.text
        assert "Email changed from &#39;mraines@example.com&#39; to &#39;memphis@example.com&#39;" in response.text

    @pytest.mark.asyncio
    async def test_missing_user_renders_404(self, client: AsyncClient, seeded_users):
        response = await client.get("/users/999")

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("text/html")
        assert "User with ID 999 not found." in response.text


class TestEditPage:
    """GET and POST /users/edit/{id}."""

    @pytest.mark.asyncio
    async def test_form_prefilled(self, client: AsyncClient, seeded_users):
        response = await client.get("/users/edit/6")

        assert response.status_code == 200
        assert "himcdunnough@example.com" in response.text
        assert "1983-10-29" in response.text

    @pytest.mark.asyncio
    async def test_submit_updates(self, client: AsyncClient, seeded_users):
        response = await client.post(
            "/users/edit/6",
            data=form_data(
                id="6",
                forename="H.I.",
                surname="McDunnough",
                email="himcdunnough@example.com",
                date_of_birth="1983-10-30",
            ),
        )

        assert response.status_code == 303
        logs = (await client.get("/api/users/6/auditlogs")).json()
        assert logs[0]["details"] == (
            "User H.I. McDunnough updated: "
            "DateOfBirth changed from '1983-10-29' to '1983-10-30'"
        )

    @pytest.mark.asyncio
    async def test_id_mismatch(self, client: AsyncClient, seeded_users):
        response = await client.post("/users/edit/6", data=form_data(id="7"))

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_invalid_submit_rerenders(self, client: AsyncClient, seeded_users):
        response = await client.post("/users/edit/6", data=form_data(id="6", email="bad"))

        assert response.status_code == 400
        assert 'name="id"' in response.text
        assert (await client.get("/api/users/6/auditlogs")).json() == []


class TestDeletePage:
    """GET and POST /users/delete/{id}."""

    @pytest.mark.asyncio
    async def test_confirmation(self, client: AsyncClient, seeded_users):
        response = await client.get("/users/delete/7")

        assert response.status_code == 200
        assert "Cameron Poe" in response.text

    @pytest.mark.asyncio
    async def test_delete(self, client: AsyncClient, seeded_users):
        response = await client.post("/users/delete/7")

        assert response.status_code == 303
        assert (await client.get("/api/users/7")).status_code == 404
