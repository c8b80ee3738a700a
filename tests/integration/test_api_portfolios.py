"""Integration tests for portfolio and theme API."""

import pytest
from httpx import AsyncClient

from folio.models.sql.user import User

PORTFOLIOS_URL = "/api/v1/portfolios"


async def create_portfolio(client: AsyncClient, headers: dict, **fields) -> dict:
    payload = {"title": "My Portfolio", **fields}
    response = await client.post(PORTFOLIOS_URL, headers=headers, json=payload)
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
class TestPortfolioAPI:
    """Integration tests for portfolio CRUD endpoints."""

    async def test_create_portfolio_from_template(
        self, client: AsyncClient, test_user: User, auth_headers: dict
    ):
        """Test the template's theme seeds the new portfolio."""
        data = await create_portfolio(client, auth_headers, template="creative-dark")

        assert data["user_id"] == str(test_user.id)
        assert data["is_published"] is False
        assert data["template_info"] == {
            "name": "Creative Dark",
            "slug": "creative-dark",
            "category": "creative",
        }
        assert data["customizations"]["colors"]["primary"] == "#8b5cf6"
        assert data["customizations"]["fonts"]["body"] == "Nunito Sans"

    async def test_create_portfolio_default_template(
        self, client: AsyncClient, auth_headers: dict
    ):
        data = await create_portfolio(client, auth_headers, template="does-not-exist")

        assert data["template_info"]["slug"] == "modern-minimalist"

    async def test_supplied_customizations_override_template(
        self, client: AsyncClient, auth_headers: dict
    ):
        """Test supplied values win and untouched template values survive."""
        data = await create_portfolio(
            client,
            auth_headers,
            template="creative-dark",
            customizations={"colors": {"primary": "#ff0000"}, "layout": {"width": "wide"}},
        )

        colors = data["customizations"]["colors"]
        assert colors["primary"] == "#ff0000"
        assert colors["background"] == "#0f172a"
        assert data["customizations"]["layout"] == {"width": "wide"}

    async def test_create_requires_auth(self, client: AsyncClient):
        response = await client.post(PORTFOLIOS_URL, json={"title": "Nope"})

        assert response.status_code in (401, 403)

    async def test_create_validates_title(self, client: AsyncClient, auth_headers: dict):
        response = await client.post(PORTFOLIOS_URL, headers=auth_headers, json={"title": ""})

        assert response.status_code == 422

    async def test_list_only_own_portfolios(
        self, client: AsyncClient, auth_headers: dict, other_headers: dict
    ):
        await create_portfolio(client, auth_headers, title="Mine")
        await create_portfolio(client, other_headers, title="Theirs")

        response = await client.get(PORTFOLIOS_URL, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["pages"] == 1
        assert [item["title"] for item in data["items"]] == ["Mine"]

    async def test_list_search_and_pagination(self, client: AsyncClient, auth_headers: dict):
        for title in ("Design work", "Photo archive", "design notes"):
            await create_portfolio(client, auth_headers, title=title)

        response = await client.get(
            PORTFOLIOS_URL, headers=auth_headers, params={"search": "design", "page_size": 1}
        )

        data = response.json()
        assert data["total"] == 2
        assert data["pages"] == 2
        assert len(data["items"]) == 1

    async def test_get_portfolio(self, client: AsyncClient, auth_headers: dict):
        created = await create_portfolio(client, auth_headers)

        response = await client.get(f"{PORTFOLIOS_URL}/{created['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    async def test_get_missing_portfolio(self, client: AsyncClient, auth_headers: dict):
        response = await client.get(f"{PORTFOLIOS_URL}/missing", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Portfolio not found"

    async def test_other_user_cannot_read_draft(
        self, client: AsyncClient, auth_headers: dict, other_headers: dict
    ):
        created = await create_portfolio(client, auth_headers)

        response = await client.get(f"{PORTFOLIOS_URL}/{created['id']}", headers=other_headers)

        assert response.status_code == 403

    async def test_anonymous_cannot_read_draft(self, client: AsyncClient, auth_headers: dict):
        created = await create_portfolio(client, auth_headers)

        response = await client.get(f"{PORTFOLIOS_URL}/{created['id']}")

        assert response.status_code == 401

    async def test_published_portfolio_is_public(
        self, client: AsyncClient, auth_headers: dict, other_headers: dict
    ):
        """Test anyone can read a published portfolio but not edit it."""
        created = await create_portfolio(client, auth_headers)
        url = f"{PORTFOLIOS_URL}/{created['id']}"
        await client.patch(url, headers=auth_headers, json={"is_published": True})

        assert (await client.get(url)).status_code == 200
        assert (await client.get(url, headers=other_headers)).status_code == 200

        response = await client.patch(url, headers=other_headers, json={"title": "Mine now"})
        assert response.status_code == 403

    async def test_admin_can_manage_any_portfolio(
        self, client: AsyncClient, auth_headers: dict, admin_headers: dict
    ):
        created = await create_portfolio(client, auth_headers)
        url = f"{PORTFOLIOS_URL}/{created['id']}"

        assert (await client.get(url, headers=admin_headers)).status_code == 200
        response = await client.patch(url, headers=admin_headers, json={"title": "Moderated"})
        assert response.json()["title"] == "Moderated"
        assert (await client.delete(url, headers=admin_headers)).status_code == 204

    async def test_update_portfolio(self, client: AsyncClient, auth_headers: dict):
        created = await create_portfolio(client, auth_headers)

        response = await client.patch(
            f"{PORTFOLIOS_URL}/{created['id']}",
            headers=auth_headers,
            json={
                "title": "Renamed",
                "content": {"sections": [{"type": "hero", "title": "Hi"}]},
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Renamed"
        assert data["content"]["sections"] == [{"type": "hero", "title": "Hi"}]

    async def test_empty_update_is_a_no_op(self, client: AsyncClient, auth_headers: dict):
        created = await create_portfolio(client, auth_headers)

        response = await client.patch(
            f"{PORTFOLIOS_URL}/{created['id']}", headers=auth_headers, json={}
        )

        assert response.status_code == 200
        assert response.json()["title"] == created["title"]

    async def test_delete_portfolio(self, client: AsyncClient, auth_headers: dict):
        created = await create_portfolio(client, auth_headers)
        url = f"{PORTFOLIOS_URL}/{created['id']}"

        response = await client.delete(url, headers=auth_headers)

        assert response.status_code == 204
        assert (await client.get(url, headers=auth_headers)).status_code == 404

    async def test_other_user_cannot_delete(
        self, client: AsyncClient, auth_headers: dict, other_headers: dict
    ):
        created = await create_portfolio(client, auth_headers)

        response = await client.delete(f"{PORTFOLIOS_URL}/{created['id']}", headers=other_headers)

        assert response.status_code == 403


@pytest.mark.asyncio
class TestPortfolioThemeAPI:
    """Integration tests for theme preview, presets and import/export."""

    async def test_theme_variables(self, client: AsyncClient, auth_headers: dict):
        created = await create_portfolio(client, auth_headers, template="creative-dark")

        response = await client.get(
            f"{PORTFOLIOS_URL}/{created['id']}/theme", headers=auth_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["variables"]["--color-primary"] == "#8b5cf6"
        assert data["variables"]["--font-heading"] == "Poppins"
        assert data["css"].startswith(":root {")
        assert "  --color-primary: #8b5cf6;" in data["css"]
        assert data["classes"] == ["theme-primary", "font-nunito-sans"]
        assert data["font_stacks"]["heading"].startswith("Poppins,")
        assert data["font_stacks"]["body"] == '"Nunito Sans", sans-serif'

    async def test_apply_color_preset(self, client: AsyncClient, auth_headers: dict):
        created = await create_portfolio(client, auth_headers)

        response = await client.post(
            f"{PORTFOLIOS_URL}/{created['id']}/theme/preset",
            headers=auth_headers,
            json={"kind": "colors", "name": "dark"},
        )

        assert response.status_code == 200
        colors = response.json()["customizations"]["colors"]
        assert colors["primary"] == "#60a5fa"
        assert colors["background"] == "#111827"

    async def test_apply_font_preset_loads_fonts(self, client: AsyncClient, auth_headers: dict):
        """Test a font pairing is stored and its families are loaded."""
        created = await create_portfolio(client, auth_headers)

        response = await client.post(
            f"{PORTFOLIOS_URL}/{created['id']}/theme/preset",
            headers=auth_headers,
            json={"kind": "fonts", "name": "professional"},
        )

        assert response.status_code == 200
        assert response.json()["customizations"]["fonts"]["body"] == "Open Sans"

        loaded = await client.get("/api/v1/fonts/loaded")
        assert loaded.json() == ["Montserrat", "Open Sans", "Roboto Mono"]

    async def test_apply_typography_preset(self, client: AsyncClient, auth_headers: dict):
        created = await create_portfolio(client, auth_headers)

        response = await client.post(
            f"{PORTFOLIOS_URL}/{created['id']}/theme/preset",
            headers=auth_headers,
            json={"kind": "typography", "name": "small"},
        )

        assert response.json()["customizations"]["typography"]["baseSize"] == "14px"

    async def test_reset_theme(self, client: AsyncClient, auth_headers: dict):
        created = await create_portfolio(client, auth_headers, template="designer-bio")

        response = await client.post(
            f"{PORTFOLIOS_URL}/{created['id']}/theme/preset",
            headers=auth_headers,
            json={"kind": "reset"},
        )

        customizations = response.json()["customizations"]
        assert customizations["colors"]["primary"] == "#3b82f6"
        assert customizations["fonts"]["heading"] == "Inter"

    async def test_unknown_preset(self, client: AsyncClient, auth_headers: dict):
        created = await create_portfolio(client, auth_headers)

        response = await client.post(
            f"{PORTFOLIOS_URL}/{created['id']}/theme/preset",
            headers=auth_headers,
            json={"kind": "colors", "name": "neon"},
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Unknown colors preset: neon"

    @pytest.mark.parametrize("kind", ["colors", "fonts", "typography"])
    async def test_preset_requires_name(
        self, client: AsyncClient, auth_headers: dict, kind: str
    ):
        """Verify named preset kinds reject a request without a name."""
        created = await create_portfolio(client, auth_headers)

        response = await client.post(
            f"{PORTFOLIOS_URL}/{created['id']}/theme/preset",
            headers=auth_headers,
            json={"kind": kind},
        )

        assert response.status_code == 422

    async def test_preset_requires_editor(
        self, client: AsyncClient, auth_headers: dict, other_headers: dict
    ):
        created = await create_portfolio(client, auth_headers)

        response = await client.post(
            f"{PORTFOLIOS_URL}/{created['id']}/theme/preset",
            headers=other_headers,
            json={"kind": "reset"},
        )

        assert response.status_code == 403

    async def test_export_then_import(
        self, client: AsyncClient, auth_headers: dict
    ):
        """Test a theme exported from one portfolio can be imported into another."""
        source = await create_portfolio(client, auth_headers, template="designer-bio")
        target = await create_portfolio(client, auth_headers, template="modern-minimalist")

        exported = await client.get(
            f"{PORTFOLIOS_URL}/{source['id']}/theme/export", headers=auth_headers
        )
        assert exported.status_code == 200
        assert "exportDate" in exported.json()

        response = await client.post(
            f"{PORTFOLIOS_URL}/{target['id']}/theme/import",
            headers=auth_headers,
            json=exported.json(),
        )

        assert response.status_code == 200
        customizations = response.json()["customizations"]
        assert customizations["colors"]["primary"] == "#f97316"
        assert customizations["fonts"]["heading"] == "Playfair Display"

    async def test_import_rejects_empty_theme(self, client: AsyncClient, auth_headers: dict):
        created = await create_portfolio(client, auth_headers)

        response = await client.post(
            f"{PORTFOLIOS_URL}/{created['id']}/theme/import",
            headers=auth_headers,
            json={"name": "not a theme"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Theme file contains no theme sections"
