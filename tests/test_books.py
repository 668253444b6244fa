"""
Tests for the /Books Pages

Index and Details are public; the rest needs a signed-in caller.
"""

from decimal import Decimal

from fastapi import status


class TestBookIndex:
    """Tests for GET /Books/Index."""

    def test_index_empty(self, client):
        response = client.get("/Books/Index")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["books"] == []
        assert data["sort_key"] == "title"
        assert data["categories"] == []

    def test_index_search_by_author(self, client, multiple_books):
        response = client.get("/Books/Index", params={"searchText": "Tolkien"})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [b["title"] for b in data["books"]] == ["Leaf by Niggle", "The Silmarillion"]
        assert data["search_text"] == "Tolkien"

    def test_index_sort_by_author(self, client, multiple_books):
        response = client.get("/Books/Index", params={"sortKey": "author"})

        titles = [b["title"] for b in response.json()["books"]]
        assert titles == ["Animal Farm", "The Silmarillion", "Leaf by Niggle"]

    def test_index_invalid_sort_key(self, client):
        response = client.get("/Books/Index", params={"sortKey": "price"})
        assert response.status_code == 422

    def test_index_selected_book_categories(self, client, sample_book):
        response = client.get("/Books/Index", params={"id": sample_book.id})

        data = response.json()
        assert data["book_id"] == sample_book.id
        assert [c["category_name"] for c in data["categories"]] == ["Classic"]

    def test_index_selected_book_missing(self, client):
        response = client.get("/Books/Index", params={"id": 999})
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestBookDetails:
    """Tests for GET /Books/Details."""

    def test_details(self, client, sample_book):
        response = client.get("/Books/Details", params={"id": sample_book.id})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["title"] == "The Hobbit"
        assert Decimal(data["price"]) == Decimal("14.99")
        assert data["author"]["full_name"] == "John Ronald Tolkien"
        assert data["publisher"]["publisher_name"] == "HarperCollins"
        assert [c["category_name"] for c in data["categories"]] == ["Classic"]
        assert data["version"] == 1

    def test_details_not_found(self, client):
        response = client.get("/Books/Details", params={"id": 999})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Book with id 999 not found"

    def test_details_requires_id(self, client):
        response = client.get("/Books/Details")
        assert response.status_code == 422


class TestCreateBook:
    """Tests for GET/POST /Books/Create."""

    def test_create_requires_sign_in(self, client):
        response = client.post("/Books/Create", json={})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_create_form(self, client, member_headers, sample_author, sample_categories):
        response = client.get("/Books/Create", headers=member_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["book"] is None
        assert [a["last_name"] for a in data["authors"]] == ["Tolkien"]
        assert all(not c["assigned"] for c in data["categories"])

    def test_create_book(
        self, client, member_headers, sample_author, sample_publisher, sample_categories
    ):
        book_data = {
            "title": "The Two Towers",
            "price": "21.50",
            "publishing_date": "1954-11-11",
            "author_id": sample_author.id,
            "publisher_id": sample_publisher.id,
            "selected_categories": [sample_categories[1].id, sample_categories[2].id],
        }

        response = client.post("/Books/Create", json=book_data, headers=member_headers)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["id"] is not None
        assert data["author"]["last_name"] == "Tolkien"
        assert sorted(c["category_name"] for c in data["categories"]) == ["Fantasy", "Poetry"]

    def test_create_book_rule_violations(self, client, member_headers):
        book_data = {"title": "It", "price": "0", "publishing_date": "2000-01-01"}

        response = client.post("/Books/Create", json=book_data, headers=member_headers)

        assert response.status_code == 422
        errors = response.json()["errors"]
        assert errors["title"] == "Title must be between 3 and 150 characters"
        assert errors["price"] == "Price must be between 0.01 and 500"

    def test_create_book_unknown_category(self, client, member_headers):
        book_data = {
            "title": "Lost Tales",
            "price": "9.00",
            "publishing_date": "1983-10-28",
            "selected_categories": [404],
        }

        response = client.post("/Books/Create", json=book_data, headers=member_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestEditBook:
    """Tests for GET/POST /Books/Edit."""

    def test_edit_form_marks_assigned_categories(self, client, member_headers, sample_book):
        response = client.get(
            "/Books/Edit", params={"id": sample_book.id}, headers=member_headers
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["book"]["version"] == 1
        assert [(c["category_name"], c["assigned"]) for c in data["categories"]] == [
            ("Classic", True),
            ("Fantasy", False),
            ("Poetry", False),
        ]

    def test_edit_book(self, client, member_headers, sample_book, sample_categories):
        response = client.post(
            "/Books/Edit",
            params={"id": sample_book.id},
            json={
                "title": "The Hobbit, or There and Back Again",
                "version": 1,
                "selected_categories": [sample_categories[1].id],
            },
            headers=member_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["title"] == "The Hobbit, or There and Back Again"
        assert Decimal(data["price"]) == Decimal("14.99")
        assert data["version"] == 2
        assert [c["category_name"] for c in data["categories"]] == ["Fantasy"]

    def test_edit_keeps_categories_when_not_sent(self, client, member_headers, sample_book):
        response = client.post(
            "/Books/Edit",
            params={"id": sample_book.id},
            json={"price": "15.00", "version": 1},
            headers=member_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert [c["category_name"] for c in response.json()["categories"]] == ["Classic"]

    def test_edit_stale_version_conflicts(self, client, member_headers, sample_book):
        first = client.post(
            "/Books/Edit",
            params={"id": sample_book.id},
            json={"price": "15.00", "version": 1},
            headers=member_headers,
        )
        second = client.post(
            "/Books/Edit",
            params={"id": sample_book.id},
            json={"price": "16.00", "version": 1},
            headers=member_headers,
        )

        assert first.status_code == status.HTTP_200_OK
        assert second.status_code == status.HTTP_409_CONFLICT

        details = client.get("/Books/Details", params={"id": sample_book.id}).json()
        assert Decimal(details["price"]) == Decimal("15.00")

    def test_stale_category_only_edit_conflicts(
        self, client, member_headers, sample_book, sample_categories
    ):
        _, fantasy, poetry = sample_categories

        first = client.post(
            "/Books/Edit",
            params={"id": sample_book.id},
            json={"version": 1, "selected_categories": [poetry.id]},
            headers=member_headers,
        )
        second = client.post(
            "/Books/Edit",
            params={"id": sample_book.id},
            json={"version": 1, "selected_categories": [fantasy.id]},
            headers=member_headers,
        )

        assert first.status_code == status.HTTP_200_OK
        assert first.json()["version"] == 2
        assert second.status_code == status.HTTP_409_CONFLICT

        details = client.get("/Books/Details", params={"id": sample_book.id}).json()
        assert [c["category_name"] for c in details["categories"]] == ["Poetry"]

    def test_edit_requires_version(self, client, member_headers, sample_book):
        response = client.post(
            "/Books/Edit",
            params={"id": sample_book.id},
            json={"price": "15.00"},
            headers=member_headers,
        )
        assert response.status_code == 422


class TestDeleteBook:
    """Tests for POST /Books/Delete."""

    def test_delete_book_with_links(self, client, member_headers, sample_borrowing, sample_book):
        response = client.post(
            "/Books/Delete", params={"id": sample_book.id}, headers=member_headers
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert client.get("/Books/Details", params={"id": sample_book.id}).status_code == 404

    def test_delete_missing_book(self, client, member_headers):
        response = client.post("/Books/Delete", params={"id": 999}, headers=member_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND
