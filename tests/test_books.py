from fastapi.testclient import TestClient

from bookshelf.models.book import Book
from bookshelf.models.note import Note
from bookshelf.models.reading_session import ReadingSession
from bookshelf.models.user_book import UserBook

BOOK_DATA = {
    "title": "Middlemarch",
    "author": " George Eliot ",
    "author_nationality": "gb",
    "isbn": "9780141439549",
    "page_count": 880,
    "genre": "Classics",
    "published_year": 1871,
}


class TestAddBook:
    """Test cases for adding books"""

    def test_add_want_to_read(self, client: TestClient, auth_headers: dict):
        response = client.post("/api/v1/books/", headers=auth_headers, json=BOOK_DATA)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert data["title"] == "Middlemarch"
        assert data["author"] == "George Eliot"
        assert data["author_nationality"] == "GB"
        assert data["user_book"]["status"] == "want_to_read"
        assert data["user_book"]["current_session_id"] is None
        assert data["reading_sessions"] == []

    def test_add_reading_opens_first_session(self, client: TestClient, auth_headers: dict):
        response = client.post(
            "/api/v1/books/", headers=auth_headers, json={**BOOK_DATA, "status": "reading"}
        )

        assert response.status_code == 201
        data = response.json()["data"]
        sessions = data["reading_sessions"]
        assert len(sessions) == 1
        assert sessions[0]["read_number"] == 1
        assert sessions[0]["finished_at"] is None
        assert data["user_book"]["current_session_id"] == sessions[0]["id"]
        assert data["user_book"]["started_at"] is not None

    def test_add_completed_is_finished_and_rated(
        self, client: TestClient, auth_headers: dict
    ):
        response = client.post(
            "/api/v1/books/",
            headers=auth_headers,
            json={**BOOK_DATA, "status": "completed", "rating": 5},
        )

        assert response.status_code == 201
        data = response.json()["data"]
        session = data["reading_sessions"][0]
        assert session["finished_at"] is not None
        assert session["rating"] == 5
        assert data["user_book"]["rating"] == 5
        assert data["user_book"]["current_page"] == 880
        assert data["user_book"]["finished_at"] is not None

    def test_add_requires_title(self, client: TestClient, auth_headers: dict):
        response = client.post(
            "/api/v1/books/", headers=auth_headers, json={**BOOK_DATA, "title": "   "}
        )

        assert response.status_code == 422
        assert response.json()["code"] == "validation_failed"

    def test_add_rejects_bad_rating(self, client: TestClient, auth_headers: dict):
        response = client.post(
            "/api/v1/books/",
            headers=auth_headers,
            json={**BOOK_DATA, "status": "completed", "rating": 6},
        )
        assert response.status_code == 422

    def test_add_requires_authentication(self, client: TestClient):
        response = client.post("/api/v1/books/", json=BOOK_DATA)

        assert response.status_code == 401
        assert response.json()["code"] == "unauthorized"

    def test_invalid_token(self, client: TestClient):
        response = client.get(
            "/api/v1/books/", headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == 401


class TestListBooks:
    def test_library_excludes_wishlist(
        self, client: TestClient, auth_headers: dict, test_book, completed_book
    ):
        client.post(
            "/api/v1/books/",
            headers=auth_headers,
            json={"title": "Wanted", "author": "Someone", "status": "wishlist"},
        )

        library = client.get("/api/v1/books/", headers=auth_headers).json()["data"]
        wishlist = client.get("/api/v1/books/wishlist", headers=auth_headers).json()["data"]

        assert {b["title"] for b in library} == {test_book.title, completed_book.title}
        assert [b["title"] for b in wishlist] == ["Wanted"]

    def test_library_is_scoped_to_caller(
        self, client: TestClient, other_auth_headers: dict, test_book
    ):
        response = client.get("/api/v1/books/", headers=other_auth_headers)

        assert response.status_code == 200
        assert response.json()["data"] == []


class TestBookDetail:
    def test_get_book(self, client: TestClient, auth_headers: dict, completed_book):
        response = client.get(f"/api/v1/books/{completed_book.id}", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == completed_book.id
        assert data["user_book"]["status"] == "completed"
        assert len(data["reading_sessions"]) == 1
        assert data["notes"] == []
        assert data["vocabulary"] == []
        assert data["collections"] == []

    def test_get_other_users_book(
        self, client: TestClient, other_auth_headers: dict, test_book
    ):
        response = client.get(f"/api/v1/books/{test_book.id}", headers=other_auth_headers)

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "not_found"

    def test_update_book(self, client: TestClient, auth_headers: dict, completed_book):
        response = client.put(
            f"/api/v1/books/{completed_book.id}",
            headers=auth_headers,
            json={"genre": "Mystery", "spine_color": "#2f4858"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["genre"] == "Mystery"
        assert data["spine_color"] == "#2f4858"
        assert data["title"] == completed_book.title
        assert data["user_book"]["status"] == "completed"

    def test_update_rejects_null_title(
        self, client: TestClient, auth_headers: dict, test_book
    ):
        response = client.put(
            f"/api/v1/books/{test_book.id}", headers=auth_headers, json={"title": None}
        )
        assert response.status_code == 422

    def test_update_cannot_shrink_below_current_page(
        self, client: TestClient, db_session, auth_headers: dict, completed_book
    ):
        """Piranesi is finished at page 272"""
        response = client.put(
            f"/api/v1/books/{completed_book.id}",
            headers=auth_headers,
            json={"page_count": 100},
        )

        assert response.status_code == 422
        body = response.json()
        assert body["code"] == "validation_failed"
        db_session.expire_all()
        book = db_session.get(Book, completed_book.id)
        assert book.page_count == 272
        assert book.user_book.current_page == 272

    def test_update_page_count_to_current_page(
        self, client: TestClient, auth_headers: dict, completed_book
    ):
        response = client.put(
            f"/api/v1/books/{completed_book.id}",
            headers=auth_headers,
            json={"page_count": 272},
        )
        assert response.status_code == 200
        assert response.json()["data"]["page_count"] == 272

    def test_delete_book_cascades(
        self, client: TestClient, db_session, auth_headers: dict, completed_book
    ):
        book_id = completed_book.id
        client.post(
            f"/api/v1/books/{book_id}/notes",
            headers=auth_headers,
            json={"content": "Beauty immeasurable", "is_quote": True},
        )

        response = client.delete(f"/api/v1/books/{book_id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Book deleted successfully"
        assert db_session.query(Book).filter(Book.id == book_id).count() == 0
        assert db_session.query(UserBook).filter(UserBook.book_id == book_id).count() == 0
        assert (
            db_session.query(ReadingSession)
            .filter(ReadingSession.book_id == book_id)
            .count()
            == 0
        )
        assert db_session.query(Note).filter(Note.book_id == book_id).count() == 0

    def test_delete_missing_book(self, client: TestClient, auth_headers: dict):
        response = client.delete("/api/v1/books/unknown", headers=auth_headers)
        assert response.status_code == 404
