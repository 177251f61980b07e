import random

from fastapi.testclient import TestClient

from bookshelf.schemas.note import NoteCreate
from bookshelf.services.annotations import AnnotationService


class TestNotes:
    """Test cases for notes and quotes"""

    def test_create_and_list_notes(self, client: TestClient, auth_headers: dict, test_book):
        url = f"/api/v1/books/{test_book.id}/notes"
        response = client.post(
            url,
            headers=auth_headers,
            json={"content": "Light is the left hand of darkness", "is_quote": True, "page_number": 233},
        )
        assert response.status_code == 201
        note = response.json()["data"]
        assert note["is_quote"] is True
        assert note["page_number"] == 233

        notes = client.get(url, headers=auth_headers).json()["data"]
        assert [n["id"] for n in notes] == [note["id"]]

    def test_blank_note_rejected(self, client: TestClient, auth_headers: dict, test_book):
        response = client.post(
            f"/api/v1/books/{test_book.id}/notes",
            headers=auth_headers,
            json={"content": "   "},
        )
        assert response.status_code == 422

    def test_page_zero_means_no_page(self, client: TestClient, auth_headers: dict, test_book):
        response = client.post(
            f"/api/v1/books/{test_book.id}/notes",
            headers=auth_headers,
            json={"content": "Somewhere early on", "page_number": 0},
        )
        assert response.json()["data"]["page_number"] is None

    def test_note_on_other_users_book(
        self, client: TestClient, other_auth_headers: dict, test_book
    ):
        response = client.post(
            f"/api/v1/books/{test_book.id}/notes",
            headers=other_auth_headers,
            json={"content": "Not mine"},
        )
        assert response.status_code == 404

    def test_edit_and_delete_note(self, client: TestClient, auth_headers: dict, test_book):
        note = client.post(
            f"/api/v1/books/{test_book.id}/notes",
            headers=auth_headers,
            json={"content": "first draft"},
        ).json()["data"]

        response = client.put(
            f"/api/v1/notes/{note['id']}",
            headers=auth_headers,
            json={"content": "second draft", "is_quote": False},
        )
        assert response.status_code == 200
        assert response.json()["data"]["content"] == "second draft"

        response = client.delete(f"/api/v1/notes/{note['id']}", headers=auth_headers)
        assert response.status_code == 200
        response = client.delete(f"/api/v1/notes/{note['id']}", headers=auth_headers)
        assert response.status_code == 404

    def test_random_quote_none(self, client: TestClient, auth_headers: dict):
        response = client.get("/api/v1/notes/quotes/random", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["data"] is None

    def test_random_quote_only_picks_quotes(
        self, db_session, ctx, test_book, completed_book
    ):
        service = AnnotationService(rng=random.Random(7))
        service.add_note(db_session, ctx, test_book.id, NoteCreate(content="plain note"))
        service.add_note(
            db_session,
            ctx,
            completed_book.id,
            NoteCreate(content="The Beauty of the House is immeasurable", is_quote=True),
        )

        for _ in range(5):
            quote = service.random_quote(db_session, ctx)
            assert quote.content == "The Beauty of the House is immeasurable"
            assert quote.book_title == "Piranesi"
            assert quote.book_author == "Susanna Clarke"


class TestVocabulary:
    def test_word_lifecycle(self, client: TestClient, auth_headers: dict, test_book):
        url = f"/api/v1/books/{test_book.id}/vocabulary"
        response = client.post(
            url,
            headers=auth_headers,
            json={
                "term": "shifgrethor",
                "definition": "prestige, face, place",
                "part_of_speech": "noun",
                "example": "",
            },
        )
        assert response.status_code == 201
        word = response.json()["data"]
        assert word["example"] is None

        words = client.get(url, headers=auth_headers).json()["data"]
        assert [w["term"] for w in words] == ["shifgrethor"]

        response = client.put(
            f"/api/v1/vocabulary/{word['id']}",
            headers=auth_headers,
            json={"term": "shifgrethor", "definition": "the ground of pride"},
        )
        assert response.json()["data"]["definition"] == "the ground of pride"

        response = client.delete(f"/api/v1/vocabulary/{word['id']}", headers=auth_headers)
        assert response.status_code == 200

    def test_definition_required(self, client: TestClient, auth_headers: dict, test_book):
        response = client.post(
            f"/api/v1/books/{test_book.id}/vocabulary",
            headers=auth_headers,
            json={"term": "kemmer", "definition": ""},
        )
        assert response.status_code == 422

    def test_list_all_with_book(
        self, client: TestClient, auth_headers: dict, test_book, completed_book
    ):
        for book, term in ((test_book, "kemmer"), (completed_book, "labyrinth")):
            client.post(
                f"/api/v1/books/{book.id}/vocabulary",
                headers=auth_headers,
                json={"term": term, "definition": "..."},
            )

        words = client.get("/api/v1/vocabulary/", headers=auth_headers).json()["data"]

        by_term = {w["term"]: w for w in words}
        assert by_term["kemmer"]["book_title"] == test_book.title
        assert by_term["labyrinth"]["book_author"] == "Susanna Clarke"
