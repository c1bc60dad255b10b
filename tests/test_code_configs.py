"""Tests for widget code configuration endpoints."""

import pytest

BASE = "/api/v1/code-config"


@pytest.mark.asyncio
async def test_save_and_get(client):
    resp = await client.post(f"{BASE}/", json={
        "api_key": "widget-key-123",
        "super_admin_url": "https://admin.example.com",
        "integration_code": "<script src='widget.js'></script>",
        "website_name": "Pixel Studio",
    })
    assert resp.status_code == 201
    assert resp.json()["super_admin_chat_url"] == ""

    resp = await client.get(f"{BASE}/widget-key-123")
    assert resp.status_code == 200
    assert resp.json()["website_name"] == "Pixel Studio"


@pytest.mark.asyncio
async def test_save_overwrites(client):
    await client.post(f"{BASE}/", json={"api_key": "k1", "website_name": "Old"})
    resp = await client.post(f"{BASE}/", json={"api_key": "k1", "super_admin_url": "https://new.example.com"})
    assert resp.status_code == 201
    data = resp.json()
    assert data["website_name"] == ""
    assert data["super_admin_url"] == "https://new.example.com"

    resp = await client.get(f"{BASE}/")
    assert len(resp.json()) == 1


@pytest.mark.asyncio
async def test_save_requires_api_key(client):
    resp = await client.post(f"{BASE}/", json={"website_name": "Nameless"})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_partial_update(client):
    await client.post(f"{BASE}/", json={"api_key": "k1", "website_name": "Pixel", "integration_code": "<script/>"})
    resp = await client.put(f"{BASE}/k1", json={"website_name": "Pixel Studio"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["website_name"] == "Pixel Studio"
    assert data["integration_code"] == "<script/>"

    assert (await client.put(f"{BASE}/missing", json={"website_name": "x"})).status_code == 404


@pytest.mark.asyncio
async def test_delete(client):
    await client.post(f"{BASE}/", json={"api_key": "k1"})
    assert (await client.delete(f"{BASE}/k1")).status_code == 204
    assert (await client.get(f"{BASE}/k1")).status_code == 404
