"""Integration tests for the saved invoices API"""

import json
from decimal import Decimal

import pytest
from httpx import AsyncClient

from fluxinvoice.adapter.repositories.invoice_store import INVOICES_KEY, KeyValueInvoiceStore
from fluxinvoice.app.services.key_value_storage import StorageWriteError
from fluxinvoice.adapter.storage.memory_storage import MemoryStorage
from fluxinvoice.depends import get_invoice_store


class ReadOnlyStorage(MemoryStorage):

    def set(self, key, value):
        raise StorageWriteError("quota exceeded")

    def remove(self, key):
        raise StorageWriteError("storage disabled")


class TestInvoicesAPI:
    """Integration test suite for /invoices"""

    @pytest.mark.asyncio
    async def test_requires_sign_in(self, anonymous_client: AsyncClient):
        response = await anonymous_client.get("/invoices")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHENTICATED"

    @pytest.mark.asyncio
    async def test_save_invoice(self, client: AsyncClient, storage, draft_payload):
        """POST /invoices computes and freezes the grand total"""
        # Act
        response = await client.post("/invoices", json={"draft": draft_payload})

        # Assert
        assert response.status_code == 201
        data = response.json()
        assert Decimal(data["total"]) == Decimal("265")
        assert data["invoiceNumber"] == "INV-0042"
        assert data["from"]["name"] == "Acme Studio"
        assert data["savedAt"]
        assert INVOICES_KEY in storage.data

    @pytest.mark.asyncio
    async def test_list_search_and_sort(self, client: AsyncClient, draft_payload):
        await client.post("/invoices", json={"draft": draft_payload})
        cheap = dict(draft_payload, invoiceNumber="INV-0043", shipping=0, discount=0, items=[])
        await client.post("/invoices", json={"draft": cheap})
        other = dict(draft_payload, invoiceNumber="X-1", to={"name": "Initech"}, **{"from": {"name": "Umbrella"}})
        await client.post("/invoices", json={"draft": other})

        response = await client.get("/invoices", params={"query": "inv-", "sort": "amountAsc"})

        assert response.status_code == 200
        data = response.json()
        assert [r["invoiceNumber"] for r in data["invoices"]] == ["INV-0043", "INV-0042"]
        assert data["totalCount"] == 3

    @pytest.mark.asyncio
    async def test_list_rejects_unknown_sort(self, client: AsyncClient):
        response = await client.get("/invoices", params={"sort": "sideways"})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_get_invoice(self, client: AsyncClient, draft_payload):
        saved = (await client.post("/invoices", json={"draft": draft_payload})).json()

        response = await client.get(f"/invoices/{saved['id']}")
        missing = await client.get("/invoices/nope")

        assert response.status_code == 200
        assert response.json()["id"] == saved["id"]
        assert missing.status_code == 404
        assert missing.json()["error"]["code"] == "INVOICE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_duplicate_invoice(self, client: AsyncClient, draft_payload):
        saved = (await client.post("/invoices", json={"draft": draft_payload})).json()

        response = await client.post(f"/invoices/{saved['id']}/duplicate")

        assert response.status_code == 201
        copy = response.json()
        assert copy["id"] != saved["id"]
        assert copy["invoiceNumber"] == "INV-0042-COPY"
        listed = (await client.get("/invoices", params={"sort": "amountDesc"})).json()["invoices"]
        assert [r["id"] for r in listed] == [copy["id"], saved["id"]]

    @pytest.mark.asyncio
    async def test_delete_invoice(self, client: AsyncClient, draft_payload):
        first = (await client.post("/invoices", json={"draft": draft_payload})).json()
        second = (await client.post("/invoices", json={"draft": draft_payload})).json()

        response = await client.delete(f"/invoices/{first['id']}")

        assert response.status_code == 200
        assert response.json() == {"recordId": first["id"], "deleted": True}
        listed = (await client.get("/invoices")).json()["invoices"]
        assert [r["id"] for r in listed] == [second["id"]]

    @pytest.mark.asyncio
    async def test_edit_flow_overwrites_in_place(self, client: AsyncClient, draft_payload):
        """
        Given: A saved invoice
        When: It is staged for edit, opened, changed and saved with sourceRecordId
        Then: The same record is updated and the handoff is consumed
        """
        saved = (await client.post("/invoices", json={"draft": draft_payload})).json()

        staged = await client.post(f"/invoices/{saved['id']}/edit")
        assert staged.status_code == 200
        assert staged.json()["draftPath"] == f"/drafts/new?id={saved['id']}"

        opened = (await client.get("/drafts/new", params={"id": saved["id"]})).json()
        assert opened["sourceRecordId"] == saved["id"]
        assert opened["draft"]["invoiceNumber"] == "INV-0042"

        reopened = (await client.get("/drafts/new", params={"id": saved["id"]})).json()
        assert reopened["sourceRecordId"] is None

        draft = dict(opened["draft"], shipping="35")
        response = await client.post(
            "/invoices", json={"draft": draft, "sourceRecordId": opened["sourceRecordId"]}
        )

        assert response.status_code == 201
        assert response.json()["id"] == saved["id"]
        assert Decimal(response.json()["total"]) == Decimal("285")
        listed = (await client.get("/invoices")).json()
        assert listed["totalCount"] == 1

    @pytest.mark.asyncio
    async def test_reopen_invoice_without_optional_amounts(self, client: AsyncClient):
        draft = {"invoiceNumber": "INV-9", "currency": "eur", "items": [{"id": 1, "name": "Widget", "unitPrice": 10}]}

        saved = await client.post("/invoices", json={"draft": draft})
        assert saved.status_code == 201
        assert saved.json()["currency"] == "EUR"
        assert Decimal(saved.json()["total"]) == 0

        await client.post(f"/invoices/{saved.json()['id']}/edit")
        opened = await client.get("/drafts/new", params={"id": saved.json()["id"]})

        assert opened.status_code == 200
        assert opened.json()["sourceRecordId"] == saved.json()["id"]
        assert opened.json()["preview"]["rows"][0]["taxPercent"] == "0%"
        assert opened.json()["preview"]["grandTotal"] == "EUR 0.00"

    @pytest.mark.asyncio
    async def test_save_keeps_unreadable_stored_entries(self, client: AsyncClient, storage, draft_payload):
        legacy = {"id": "old", "items": [{"name": "no id", "qty": 1, "rate": 5}]}
        storage.data[INVOICES_KEY] = json.dumps([legacy])

        saved = (await client.post("/invoices", json={"draft": draft_payload})).json()
        deleted = await client.delete(f"/invoices/{saved['id']}")

        assert deleted.status_code == 200
        assert json.loads(storage.data[INVOICES_KEY]) == [legacy]
        assert (await client.get("/invoices")).json()["totalCount"] == 0

    @pytest.mark.asyncio
    async def test_edit_unknown_invoice(self, client: AsyncClient):
        response = await client.post("/invoices/nope/edit")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_save_failure_reported(self, app, client: AsyncClient, draft_payload):
        """Storage refusing the write is a 507, never a silent success"""
        app.dependency_overrides[get_invoice_store] = lambda: KeyValueInvoiceStore(ReadOnlyStorage())

        response = await client.post("/invoices", json={"draft": draft_payload})

        assert response.status_code == 507
        assert response.json()["error"]["code"] == "SAVE_FAILED"
