"""Integration tests for the wishlist endpoints."""


class TestWishlistEndpoints:
    def test_requires_session(self, client):
        assert client.get("/api/wishlist").status_code == 401

    def test_session_with_subject_only(self, client, make_product, make_token):
        headers = {"Authorization": f"Bearer {make_token('user_2bare')}"}
        product_id = str(make_product().id)

        added = client.post("/api/wishlist", json={"productId": product_id, "action": "add"}, headers=headers)
        assert added.status_code == 200
        assert added.json()["data"] == [product_id]

        listed = client.get("/api/wishlist", headers=headers)
        assert listed.status_code == 200
        assert len(listed.json()["data"]) == 1

    def test_empty_wishlist(self, client, auth_headers):
        response = client.get("/api/wishlist", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"] == []

    def test_add_then_list(self, client, make_product, auth_headers):
        product = make_product(name="Teak Sofa")

        response = client.post(
            "/api/wishlist", json={"productId": str(product.id), "action": "add"}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "data": [str(product.id)],
            "message": "Product added to wishlist.",
        }

        listed = client.get("/api/wishlist", headers=auth_headers).json()["data"]
        assert [p["name"] for p in listed] == ["Teak Sofa"]

    def test_add_twice_then_remove(self, client, make_product, auth_headers):
        product_id = str(make_product().id)
        for _ in range(2):
            client.post("/api/wishlist", json={"productId": product_id, "action": "add"}, headers=auth_headers)

        response = client.post(
            "/api/wishlist", json={"productId": product_id, "action": "remove"}, headers=auth_headers
        )
        assert response.json()["data"] == []
        assert response.json()["message"] == "Product removed from wishlist."

    def test_invalid_action(self, client, make_product, auth_headers):
        response = client.post(
            "/api/wishlist", json={"productId": str(make_product().id), "action": "flip"}, headers=auth_headers
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid action."

    def test_missing_product_id(self, client, auth_headers):
        response = client.post("/api/wishlist", json={"action": "add"}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Product ID and action are required."
