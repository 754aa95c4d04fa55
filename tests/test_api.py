"""Tests for the HTTP endpoints."""

from fastapi.testclient import TestClient

from string_analyzer.identity import assign_identifier


def create(client: TestClient, value):
    return client.post("/strings", json={"value": value})


class TestCreateString:
    def test_created(self, client: TestClient):
        response = create(client, "level")
        assert response.status_code == 201
        body = response.json()
        assert body["id"] == assign_identifier("level")
        assert body["value"] == "level"
        assert body["properties"] == {
            "length": 5,
            "is_palindrome": True,
            "unique_characters": 3,
            "word_count": 1,
            "sha256_hash": assign_identifier("level"),
            "character_frequency_map": {"l": 2, "e": 2, "v": 1},
        }
        assert "created_at" in body

    def test_duplicate_conflict(self, client: TestClient):
        create(client, "level")
        response = create(client, "level")
        assert response.status_code == 409
        assert response.json() == {"error": "String already exists in the system"}

    def test_missing_value(self, client: TestClient):
        response = client.post("/strings", json={})
        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"

    def test_non_string_value(self, client: TestClient):
        response = create(client, 123)
        assert response.status_code == 422


class TestGetString:
    def test_found(self, client: TestClient):
        create(client, "hello world")
        response = client.get("/strings/hello world")
        assert response.status_code == 200
        assert response.json()["properties"]["word_count"] == 2

    def test_not_found(self, client: TestClient):
        response = client.get("/strings/missing")
        assert response.status_code == 404
        assert response.json() == {"error": "String does not exist in the system"}

    def test_value_with_slash(self, client: TestClient):
        assert create(client, "a/b").status_code == 201
        response = client.get("/strings/a/b")
        assert response.status_code == 200
        assert response.json()["value"] == "a/b"
        assert client.delete("/strings/a/b").status_code == 204

    def test_value_shadowed_by_query_route(self, client: TestClient):
        # The natural-language route takes this path; the value can be stored but not fetched
        assert create(client, "filter-by-natural-language").status_code == 201
        response = client.get("/strings/filter-by-natural-language")
        assert response.status_code == 400


class TestListStrings:
    def test_filters(self, client: TestClient):
        for value in ["level", "hello world", "noon"]:
            create(client, value)

        response = client.get("/strings", params={"is_palindrome": "true", "min_length": 5})
        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        assert body["data"][0]["value"] == "level"
        assert body["filters_applied"] == {"is_palindrome": True, "min_length": 5}

    def test_empty_result(self, client: TestClient):
        response = client.get("/strings", params={"word_count": 4})
        assert response.status_code == 200
        assert response.json() == {"data": [], "count": 0, "filters_applied": {"word_count": 4}}

    def test_bad_parameter(self, client: TestClient):
        response = client.get("/strings", params={"min_length": "abc"})
        assert response.status_code == 400

    def test_contains_character_must_be_single(self, client: TestClient):
        response = client.get("/strings", params={"contains_character": "ab"})
        assert response.status_code == 400


class TestNaturalLanguage:
    def test_interpreted(self, client: TestClient):
        for value in ["level", "a", "hello world"]:
            create(client, value)

        response = client.get(
            "/strings/filter-by-natural-language",
            params={"query": "Show me palindromic strings longer than 3"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        assert body["data"][0]["value"] == "level"
        assert body["interpreted_query"] == {
            "original": "Show me palindromic strings longer than 3",
            "parsed_filters": {"is_palindrome": True, "min_length": 4},
        }

    def test_unparseable(self, client: TestClient):
        response = client.get("/strings/filter-by-natural-language", params={"query": "anything"})
        assert response.status_code == 400

    def test_missing_query(self, client: TestClient):
        response = client.get("/strings/filter-by-natural-language")
        assert response.status_code == 400

    def test_conflicting(self, client: TestClient):
        response = client.get(
            "/strings/filter-by-natural-language",
            params={"query": "longer than 10 and shorter than 3"},
        )
        assert response.status_code == 422
        assert response.json()["interpreted_query"]["parsed_filters"] == {"min_length": 11, "max_length": 2}


class TestDeleteString:
    def test_deleted(self, client: TestClient):
        create(client, "level")
        response = client.delete("/strings/level")
        assert response.status_code == 204
        assert client.get("/strings/level").status_code == 404

    def test_not_found(self, client: TestClient):
        assert client.delete("/strings/level").status_code == 404


class TestServiceInfo:
    def test_root(self, client: TestClient):
        assert client.get("/").json()["message"] == "String Analyzer Service"

    def test_health(self, client: TestClient):
        create(client, "level")
        assert client.get("/health").json() == {"status": "healthy", "total_strings": 1}
