from fastapi.testclient import TestClient

BASE = "/api/demo/live"


def test_list_schemas_includes_natives(client: TestClient):
    response = client.get(f"{BASE}/schemas")

    assert response.status_code == 200
    ids = [s["id"] for s in response.json()]
    assert {"contentBase", "page", "string", "array"} <= set(ids)


def test_save_and_get_schema(client: TestClient):
    response = client.post(
        f"{BASE}/schemas/article",
        json={"name": "Article", "parentSchemaId": "page", "tabs": {"body": "Body"}},
    )
    assert response.status_code == 200

    schema = client.get(f"{BASE}/schemas/article").json()
    assert schema["id"] == "article"
    assert schema["parentSchemaId"] == "page"


def test_get_missing_schema(client: TestClient):
    assert client.get(f"{BASE}/schemas/missing").status_code == 404
    assert client.get(f"{BASE}/schemas/missing/merged").status_code == 404


def test_merged_schema(client: TestClient):
    client.post(f"{BASE}/schemas/article", json={"parentSchemaId": "page", "tabs": {"body": "Body"}})

    merged = client.get(f"{BASE}/schemas/article/merged").json()

    assert merged["chain"] == ["contentBase", "page", "article"]
    assert merged["tabs"] == {"content": "Content", "body": "Body"}
    assert {"title", "url"} <= set(merged["fields"]["properties"])


def test_cyclic_schema_conflict(client: TestClient):
    client.post(f"{BASE}/schemas/a", json={"parentSchemaId": "b"})
    client.post(f"{BASE}/schemas/b", json={"parentSchemaId": "a"})

    response = client.get(f"{BASE}/schemas/a/merged")

    assert response.status_code == 409
    assert "a -> b -> a" in response.json()["detail"]


def test_native_schema_cannot_be_saved(client: TestClient):
    response = client.post(f"{BASE}/schemas/page", json={"name": "Mine"})

    assert response.status_code == 403


def test_list_editors(client: TestClient):
    response = client.get(f"{BASE}/editors")

    assert response.status_code == 200
    editors = {e["id"]: e for e in response.json()}
    assert "StringEditor" in editors
    assert "min" in editors["NumberEditor"]["configFields"]
