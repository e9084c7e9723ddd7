"""End-to-end tests for the contract HTTP API over an in-memory database."""

from datetime import date

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.application.interfaces import ContractDocumentRenderer
from app.application.services import IdentityService
from app.domain.entities import Contract
from app.domain.exceptions import RenderError
from app.infrastructure.database.repositories import SQLAlchemyUserRepository
from app.infrastructure.dependencies import get_contract_renderer
from app.main import app

PAYLOAD = {
    "city": "Beijing",
    "address": "1 Main St",
    "driverName": "Li Wei",
    "idNumber": "110101199001011234",
    "birthday": "1990-01-01",
}

U1 = {"x-openid": "u1"}
U2 = {"x-openid": "u2"}
ADMIN = {"x-wx-openid": "boss"}


class BrokenRenderer(ContractDocumentRenderer):
    async def render(self, contract: Contract, signed_on: date | None = None) -> bytes:
        raise RenderError("resource exhaustion")


class CrashingRenderer(ContractDocumentRenderer):
    async def render(self, contract: Contract, signed_on: date | None = None) -> bytes:
        raise KeyError("glyph")


@pytest_asyncio.fixture
async def admin(api):
    async with api.session_factory() as session:
        await IdentityService(SQLAlchemyUserRepository(session)).ensure_admin("boss")


async def _create(api, headers=U1, payload=PAYLOAD) -> dict:
    response = await api.client.post("/contracts", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["contract"]


# ── Identity ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_missing_identity_is_401(api):
    response = await api.client.get("/contracts")
    assert response.status_code == 401
    assert response.json()["message"]
    assert response.json()["kind"] == "unauthenticated"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("headers", "params"),
    [
        ({"x-wx-openid": "u1"}, None),
        ({"x-tcb-openid": "u1"}, None),
        ({"x-dev-openid": "u1"}, None),
        ({}, {"openId": "u1"}),
    ],
)
async def test_identity_extraction_chain(api, headers, params):
    response = await api.client.get("/contracts", headers=headers, params=params)
    assert response.status_code == 200
    assert response.json() == {"contracts": [], "role": "user"}


@pytest.mark.asyncio
async def test_first_header_in_chain_wins(api):
    await _create(api, headers={"x-wx-openid": "u1", "x-openid": "u2"})
    response = await api.client.get("/contracts", headers=U2)
    assert response.json()["contracts"] == []


# ── Scenario ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_ownership_and_admin_scenario(api, admin):
    contract = await _create(api)
    assert contract["createdBy"] == "u1"
    assert contract["documentRef"]
    assert contract["documentStatus"] == "ready"
    assert contract["pdfUrl"].startswith("http://test/files/contracts/")
    assert contract["extraNotes"] == ""

    response = await api.client.get(f"/contracts/{contract['id']}", headers=U2)
    assert response.status_code == 403

    response = await api.client.get(f"/contracts/{contract['id']}", headers=ADMIN)
    assert response.status_code == 200
    assert response.json()["contract"]["pdfUrl"]

    response = await api.client.post("/contracts", json=PAYLOAD, headers=ADMIN)
    assert response.status_code == 403
    assert response.json()["kind"] == "forbidden"


@pytest.mark.asyncio
async def test_timestamps_are_iso_strings(api):
    contract = await _create(api)
    assert contract["createdAt"].endswith("+00:00")
    assert contract["updatedAt"] >= contract["createdAt"]


@pytest.mark.asyncio
async def test_pdf_url_downloads_document(api):
    contract = await _create(api)
    path = contract["pdfUrl"].removeprefix("http://test")

    response = await api.client.get(path)
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")

    tampered = path.replace("signature=", "signature=0")
    assert (await api.client.get(tampered)).status_code == 403


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["city", "address", "driverName", "idNumber", "birthday"])
async def test_required_fields_rejected_without_record(api, field):
    for payload in ({**PAYLOAD, field: ""}, {k: v for k, v in PAYLOAD.items() if k != field}):
        response = await api.client.post("/contracts", json=payload, headers=U1)
        assert response.status_code == 400
        assert response.json() == {"message": f"{field} 为必填项", "kind": "validation_error"}

    listing = await api.client.get("/contracts", headers=U1)
    assert listing.json()["contracts"] == []


# ── List ─────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_list_scoped_per_role(api, admin):
    mine = await _create(api, headers=U1)
    theirs = await _create(api, headers=U2)

    response = await api.client.get("/contracts", headers=U1)
    body = response.json()
    assert body["role"] == "user"
    assert [c["id"] for c in body["contracts"]] == [mine["id"]]
    assert body["contracts"][0]["pdfUrl"]

    response = await api.client.get("/contracts", headers=ADMIN)
    body = response.json()
    assert body["role"] == "admin"
    assert {c["id"] for c in body["contracts"]} == {mine["id"], theirs["id"]}


# ── Update ───────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_update_merges_and_issues_new_document(api):
    contract = await _create(api)

    response = await api.client.put(
        f"/contracts/{contract['id']}", json={"city": ""}, headers=U1
    )
    assert response.status_code == 200
    unchanged = response.json()["contract"]
    assert unchanged["city"] == "Beijing"
    assert unchanged["documentRef"] != contract["documentRef"]

    response = await api.client.put(
        f"/contracts/{contract['id']}", json={"city": "   "}, headers=U1
    )
    assert response.status_code == 200
    assert response.json()["contract"]["city"] == "Beijing"

    response = await api.client.put(
        f"/contracts/{contract['id']}", json={"city": "Shanghai"}, headers=U1
    )
    updated = response.json()["contract"]
    assert updated["city"] == "Shanghai"
    assert updated["address"] == contract["address"]
    assert updated["createdBy"] == "u1"
    assert updated["documentRef"] not in (contract["documentRef"], unchanged["documentRef"])

    # earlier documents are not removed by an update
    old_path = contract["pdfUrl"].removeprefix("http://test")
    assert (await api.client.get(old_path)).status_code == 200


@pytest.mark.asyncio
async def test_update_rules(api, admin):
    contract = await _create(api)
    url = f"/contracts/{contract['id']}"

    assert (await api.client.put(url, json={"city": "X"}, headers=U2)).status_code == 403
    assert (await api.client.put(url, json={"city": "X"}, headers=ADMIN)).status_code == 403
    response = await api.client.put("/contracts/missing", json={"city": "X"}, headers=U1)
    assert response.status_code == 404
    assert response.json()["message"] == "合同不存在"


# ── Delete ───────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_delete_cascades_to_document(api):
    contract = await _create(api)
    pdf_path = contract["pdfUrl"].removeprefix("http://test")

    response = await api.client.delete(f"/contracts/{contract['id']}", headers=U1)
    assert response.status_code == 200
    assert response.json() == {"message": "删除成功"}

    assert (await api.client.get(f"/contracts/{contract['id']}", headers=U1)).status_code == 404
    assert (await api.client.get(pdf_path)).status_code == 404


@pytest.mark.asyncio
async def test_delete_rules(api, admin):
    contract = await _create(api)
    url = f"/contracts/{contract['id']}"

    assert (await api.client.delete(url, headers=U2)).status_code == 403
    assert (await api.client.delete(url, headers=ADMIN)).status_code == 200
    assert (await api.client.delete(url, headers=ADMIN)).status_code == 404


# ── Document failures ────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_render_failure_returns_500_and_leaves_failed_record(api):
    app.dependency_overrides[get_contract_renderer] = BrokenRenderer

    response = await api.client.post("/contracts", json=PAYLOAD, headers=U1)
    assert response.status_code == 500
    body = response.json()
    assert body["kind"] == "render_error"
    assert "resource exhaustion" not in body["message"]

    [orphan] = (await api.client.get("/contracts", headers=U1)).json()["contracts"]
    assert orphan["documentRef"] == ""
    assert orphan["documentStatus"] == "failed"
    assert orphan["pdfUrl"] == ""


@pytest.mark.asyncio
async def test_unexpected_error_is_500_with_cors_and_failed_record(api):
    app.dependency_overrides[get_contract_renderer] = CrashingRenderer

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post(
            "/contracts", json=PAYLOAD, headers={**U1, "Origin": "http://app.test"}
        )

    assert response.status_code == 500
    assert response.json() == {"message": "服务器内部错误", "kind": "unexpected_error"}
    assert response.headers["access-control-allow-origin"] == "*"

    [orphan] = (await api.client.get("/contracts", headers=U1)).json()["contracts"]
    assert orphan["documentStatus"] == "failed"


# ── CORS ─────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_options_short_circuits_with_204(api):
    response = await api.client.options(
        "/contracts",
        headers={"Origin": "http://app.test", "Access-Control-Request-Method": "POST"},
    )
    assert response.status_code == 204
    assert response.headers["access-control-allow-origin"] == "*"
    assert "DELETE" in response.headers["access-control-allow-methods"]
    assert "Authorization" in response.headers["access-control-allow-headers"]

    bare = await api.client.options("/contracts/anything")
    assert bare.status_code == 204


@pytest.mark.asyncio
async def test_cors_headers_on_regular_requests(api):
    response = await api.client.get("/health", headers={"Origin": "http://app.test"})
    assert response.headers["access-control-allow-origin"] == "*"
