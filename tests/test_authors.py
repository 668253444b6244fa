"""
Tests for the /Authors Pages (administrators only)
"""

from fastapi import status

from library_catalog.models import Book


class TestAuthorIndex:
    """Tests for GET /Authors/Index."""

    def test_index_requires_admin(self, client, member_headers):
        assert client.get("/Authors/Index").status_code == status.HTTP_401_UNAUTHORIZED
        response = client.get("/Authors/Index", headers=member_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_index_lists_authors(self, client, admin_headers, multiple_books):
        response = client.get("/Authors/Index", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [a["last_name"] for a in data["authors"]] == ["Orwell", "Tolkien"]
        assert data["books"] == []

    def test_index_selected_author_books(
        self, client, admin_headers, multiple_books, sample_author
    ):
        response = client.get(
            "/Authors/Index", params={"id": sample_author.id}, headers=admin_headers
        )

        data = response.json()
        assert data["author_id"] == sample_author.id
        assert [b["title"] for b in data["books"]] == ["Leaf by Niggle", "The Silmarillion"]


class TestAuthorWrites:
    def test_create_author(self, client, admin_headers):
        response = client.post(
            "/Authors/Create",
            json={"first_name": "Mihai", "last_name": "Eminescu"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["full_name"] == "Mihai Eminescu"
        assert data["version"] == 1

    def test_create_author_blank_name(self, client, admin_headers):
        response = client.post(
            "/Authors/Create",
            json={"first_name": "  ", "last_name": "Eminescu"},
            headers=admin_headers,
        )

        assert response.status_code == 422
        assert response.json()["errors"] == {"first_name": "First name is required"}

    def test_edit_author(self, client, admin_headers, sample_author):
        response = client.post(
            "/Authors/Edit",
            params={"id": sample_author.id},
            json={"first_name": "J R R", "version": 1},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["full_name"] == "J R R Tolkien"
        assert data["version"] == 2

    def test_edit_author_stale_version(self, client, admin_headers, sample_author):
        client.post(
            "/Authors/Edit",
            params={"id": sample_author.id},
            json={"first_name": "Christopher", "version": 1},
            headers=admin_headers,
        )
        response = client.post(
            "/Authors/Edit",
            params={"id": sample_author.id},
            json={"first_name": "Edith", "version": 1},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_delete_author_keeps_books(
        self, client, admin_headers, gateway, sample_book, sample_author
    ):
        response = client.post(
            "/Authors/Delete", params={"id": sample_author.id}, headers=admin_headers
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        book = gateway.find(Book, sample_book.id)
        assert book.author_id is None
