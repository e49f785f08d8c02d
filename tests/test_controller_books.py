import unittest

from fastapi.testclient import TestClient

from main import create_app
from repositories.repository_books import BookRepository


class TestBaseBookController(unittest.TestCase):
    def setUp(self):
        self.repository = BookRepository()
        self.client = TestClient(create_app(self.repository))

    def create(self, **payload):
        return self.client.post("/books", json=payload)


class TestBookRoutes(TestBaseBookController):
    def test_root(self):
        response = self.client.get("/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.text, "Bookstore API is running")

    def test_create_book(self):
        response = self.create(id=1, title="T", author="A")

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["id"], 1)
        self.assertTrue(body["createdAt"])

    def test_create_invalid_book(self):
        response = self.create(id=1, title="", author="A")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Invalid title", "kind": "InvalidField"})

    def test_create_duplicate_book(self):
        self.create(id=1, title="T", author="A")

        response = self.create(id=1, title="T2", author="A2")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["kind"], "DuplicateIdentifier")

    def test_create_without_object_body(self):
        missing = self.client.post("/books")
        not_object = self.client.post("/books", json=[1])

        for response in (missing, not_object):
            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.json(), {"error": "Invalid id", "kind": "InvalidField"})

    def test_update_without_object_body(self):
        self.create(id=1, title="T", author="A")

        missing = self.client.patch("/books/1")
        not_object = self.client.patch("/books/1", json=["title"])

        for response in (missing, not_object):
            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.json()["kind"], "NoUpdateData")

    def test_non_decimal_ids_are_rejected(self):
        self.create(id=10, title="T", author="A")

        for raw in ("1_0", "+10", "1e1"):
            with self.subTest(raw=raw):
                response = self.client.get(f"/books/{raw}")
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json()["kind"], "InvalidIdentifier")

    def test_cors_preflight(self):
        response = self.client.options(
            "/books",
            headers={"Origin": "http://localhost:8000", "Access-Control-Request-Method": "PATCH"},
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["access-control-allow-origin"], "http://localhost:8000")

    def test_read_book(self):
        self.create(id=1, title="T", author="A")

        self.assertEqual(self.client.get("/books/1").json()["title"], "T")
        self.assertEqual(self.client.get("/books/2").status_code, 404)
        self.assertEqual(self.client.get("/books/abc").status_code, 400)

    def test_list_books_with_filters(self):
        self.create(id=1, title="Dune", author="Herbert", genre="Sci-Fi")
        self.create(id=2, title="1984", author="Orwell", genre="Dystopian")
        self.create(id=3, title="Foundation", author="Asimov", genre="Sci-Fi")

        all_books = self.client.get("/books").json()
        sci_fi = self.client.get("/books", params={"genre": "sci-fi"}).json()
        by_author = self.client.get("/books", params={"genre": "sci-fi", "author": "asi"}).json()

        self.assertEqual([book["id"] for book in all_books], [1, 2, 3])
        self.assertEqual([book["id"] for book in sci_fi], [1, 3])
        self.assertEqual([book["id"] for book in by_author], [3])
        self.assertEqual(self.client.get("/books", params={"genre": "Horror"}).json(), [])

    def test_update_book(self):
        created = self.create(id=1, title="T", author="A").json()

        response = self.client.patch("/books/1", json={"title": "New", "price": 10})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["title"], "New")
        self.assertEqual(response.json()["createdAt"], created["createdAt"])

    def test_update_errors(self):
        self.create(id=1, title="T", author="A")

        cases = [
            ("/books/abc", {"title": "x"}, 400, "InvalidIdentifier"),
            ("/books/999", {"title": "x"}, 404, "NotFound"),
            ("/books/1", {}, 400, "NoUpdateData"),
            ("/books/1", {"id": 2}, 400, "ImmutableFieldUpdate"),
            ("/books/1", {"price": "x"}, 400, "InvalidField"),
        ]
        for path, payload, status_code, kind in cases:
            with self.subTest(path=path, payload=payload):
                response = self.client.patch(path, json=payload)
                self.assertEqual(response.status_code, status_code)
                self.assertEqual(response.json()["kind"], kind)

    def test_delete_book(self):
        self.create(id=1, title="T", author="A")

        first = self.client.delete("/books/1")
        second = self.client.delete("/books/1")

        self.assertEqual(first.status_code, 204)
        self.assertEqual(first.content, b"")
        self.assertEqual(second.status_code, 404)
        self.assertEqual(self.client.delete("/books/0").status_code, 400)

    def test_delete_all_books(self):
        self.create(id=1, title="T", author="A")

        self.assertEqual(self.client.delete("/books").status_code, 204)
        self.assertEqual(len(self.repository), 0)


class TestDiscountedPriceRoute(TestBaseBookController):
    def setUp(self):
        super().setUp()
        self.create(id=1, title="Dune", author="Herbert", genre="Sci-Fi", price=100)
        self.create(id=2, title="Foundation", author="Asimov", genre="Sci-Fi", price=50)
        self.create(id=3, title="Solaris", author="Lem", genre="Fantasy")
        self.create(id=4, title="Earthsea", author="Le Guin", genre="Fantasy", price=50)

    def test_discounted_price(self):
        response = self.client.get("/books/discounted-price", params={"genre": "Sci-Fi", "discount": "20"})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["genre"], "Sci-Fi")
        self.assertEqual(body["discount_percentage"], 20)
        self.assertAlmostEqual(body["total_discounted_price"], 120)

    def test_missing_price_counts_as_zero(self):
        response = self.client.get("/books/discounted-price", params={"genre": "fantasy", "discount": "10"})

        self.assertAlmostEqual(response.json()["total_discounted_price"], 45)

    def test_discounted_price_errors(self):
        cases = [
            ({"discount": "10"}, 400, "InvalidOrMissingGenre"),
            ({"genre": "Sci-Fi", "discount": "abc"}, 400, "InvalidDiscountPercent"),
            ({"genre": "Sci-Fi", "discount": "150"}, 400, "InvalidDiscountPercent"),
            ({"genre": "Horror", "discount": "10"}, 404, "NoBooksForGenre"),
        ]
        for params, status_code, kind in cases:
            with self.subTest(params=params):
                response = self.client.get("/books/discounted-price", params=params)
                self.assertEqual(response.status_code, status_code)
                self.assertEqual(response.json()["kind"], kind)


if __name__ == "__main__":
    unittest.main()
