from fastapi.testclient import TestClient


def get_sessions(client: TestClient, headers: dict, book_id: str):
    response = client.get(f"/api/v1/books/{book_id}/sessions", headers=headers)
    assert response.status_code == 200
    return response.json()["data"]


class TestStatusEndpoint:
    """Test cases for reading status changes over HTTP"""

    def test_start_and_finish(self, client: TestClient, auth_headers: dict, test_book):
        response = client.patch(
            f"/api/v1/books/{test_book.id}/status",
            headers=auth_headers,
            json={"status": "reading"},
        )
        assert response.status_code == 200
        user_book = response.json()["data"]
        assert user_book["status"] == "reading"

        response = client.patch(
            f"/api/v1/books/{test_book.id}/status",
            headers=auth_headers,
            json={"status": "completed"},
        )
        assert response.status_code == 200
        assert response.json()["data"]["finished_at"] is not None

        sessions = get_sessions(client, auth_headers, test_book.id)
        assert len(sessions) == 1
        assert sessions[0]["id"] == user_book["current_session_id"]
        assert sessions[0]["finished_at"] is not None

    def test_invalid_status(self, client: TestClient, auth_headers: dict, test_book):
        response = client.patch(
            f"/api/v1/books/{test_book.id}/status",
            headers=auth_headers,
            json={"status": "abandoned"},
        )
        assert response.status_code == 422

    def test_status_of_other_users_book(
        self, client: TestClient, other_auth_headers: dict, test_book
    ):
        response = client.patch(
            f"/api/v1/books/{test_book.id}/status",
            headers=other_auth_headers,
            json={"status": "reading"},
        )
        assert response.status_code == 404


class TestProgressEndpoint:
    def test_update_progress(self, client: TestClient, auth_headers: dict, test_book):
        response = client.patch(
            f"/api/v1/books/{test_book.id}/progress",
            headers=auth_headers,
            json={"current_page": 150},
        )

        assert response.status_code == 200
        assert response.json()["data"]["current_page"] == 150

    def test_non_numeric_page(self, client: TestClient, auth_headers: dict, test_book):
        response = client.patch(
            f"/api/v1/books/{test_book.id}/progress",
            headers=auth_headers,
            json={"current_page": "lots"},
        )
        assert response.status_code == 422

    def test_page_beyond_book(self, client: TestClient, auth_headers: dict, test_book):
        response = client.patch(
            f"/api/v1/books/{test_book.id}/progress",
            headers=auth_headers,
            json={"current_page": 1000},
        )

        assert response.status_code == 422
        assert response.json()["params"]["page_count"] == 304


class TestNewReadEndpoint:
    def test_start_new_read(self, client: TestClient, auth_headers: dict, completed_book):
        response = client.post(
            f"/api/v1/books/{completed_book.id}/sessions/new-read", headers=auth_headers
        )

        assert response.status_code == 201
        user_book = response.json()["data"]
        assert user_book["status"] == "reading"
        assert user_book["current_page"] == 0

        sessions = get_sessions(client, auth_headers, completed_book.id)
        assert [s["read_number"] for s in sessions] == [2, 1]
        assert sessions[0]["id"] == user_book["current_session_id"]

    def test_new_read_requires_completed(
        self, client: TestClient, auth_headers: dict, test_book
    ):
        response = client.post(
            f"/api/v1/books/{test_book.id}/sessions/new-read", headers=auth_headers
        )

        assert response.status_code == 422
        body = response.json()
        assert body["code"] == "validation_failed"
        assert body["params"]["status"] == "want_to_read"


class TestSessionEndpoints:
    def test_edit_session(self, client: TestClient, auth_headers: dict, completed_book):
        session = get_sessions(client, auth_headers, completed_book.id)[0]

        response = client.patch(
            f"/api/v1/sessions/{session['id']}",
            headers=auth_headers,
            json={"rating": 3, "review": "Stranger than remembered"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["rating"] == 3
        assert data["review"] == "Stranger than remembered"
        assert data["finished_at"] == session["finished_at"]

    def test_edit_session_rating_out_of_range(
        self, client: TestClient, auth_headers: dict, completed_book
    ):
        session = get_sessions(client, auth_headers, completed_book.id)[0]

        response = client.patch(
            f"/api/v1/sessions/{session['id']}",
            headers=auth_headers,
            json={"rating": 9},
        )
        assert response.status_code == 422

    def test_delete_current_session(
        self, client: TestClient, auth_headers: dict, completed_book
    ):
        client.post(
            f"/api/v1/books/{completed_book.id}/sessions/new-read", headers=auth_headers
        )
        current, first = get_sessions(client, auth_headers, completed_book.id)

        response = client.delete(f"/api/v1/sessions/{current['id']}", headers=auth_headers)

        assert response.status_code == 200
        user_book = response.json()["data"]
        assert user_book["current_session_id"] is None
        assert user_book["status"] == "want_to_read"
        remaining = get_sessions(client, auth_headers, completed_book.id)
        assert [s["id"] for s in remaining] == [first["id"]]

    def test_delete_unknown_session(self, client: TestClient, auth_headers: dict):
        response = client.delete("/api/v1/sessions/unknown", headers=auth_headers)
        assert response.status_code == 404

    def test_sessions_of_unknown_book(self, client: TestClient, auth_headers: dict):
        response = client.get("/api/v1/books/unknown/sessions", headers=auth_headers)
        assert response.status_code == 404
