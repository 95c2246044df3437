from medreminder.models import Pharmacy, PharmacyStock


def create_pharmacy(client, pharmacist_id, name, **extra):
    response = client.post("/api/pharmacies", json={"name": name, "pharmacistId": pharmacist_id, **extra})
    assert response.status_code == 201, response.get_json()
    return response.get_json()["pharmacyId"]


class TestPharmacies:

    def test_create_with_initial_stock(self, client, db, pharmacist, medication_id):
        aspirin = medication_id("Aspirin")
        pharmacy_id = create_pharmacy(client, pharmacist["id"], "Pharmacie Centrale",
                                      initialMeds=[{"id": aspirin, "quantity": 12}])

        pharmacy = db.session.get(Pharmacy, pharmacy_id)
        assert pharmacy.opening_time == "08:00"
        assert pharmacy.closing_time == "20:00"
        (stock,) = client.get(f"/api/pharmacies/{pharmacy_id}/stock").get_json()["stock"]
        assert stock == {"id": stock["id"], "medicationId": aspirin, "medicationName": "Aspirin", "quantity": 12}

    def test_list_by_pharmacist(self, client, pharmacist, login):
        other = login(email="other@example.com", type_="pharmacist")
        create_pharmacy(client, pharmacist["id"], "Mine")
        create_pharmacy(client, other["id"], "Theirs")

        response = client.get(f"/api/pharmacies?pharmacistId={pharmacist['id']}")
        assert [p["name"] for p in response.get_json()["pharmacies"]] == ["Mine"]
        assert client.get("/api/pharmacies").status_code == 400

    def test_create_requires_name_and_pharmacist(self, client, pharmacist):
        assert client.post("/api/pharmacies", json={"name": "No owner"}).status_code == 400
        assert client.post("/api/pharmacies", json={"pharmacistId": pharmacist["id"]}).status_code == 400

    def test_negative_initial_quantity_writes_nothing(self, client, pharmacist, medication_id):
        aspirin = medication_id("Aspirin")
        response = client.post("/api/pharmacies", json={
            "name": "Bad stock", "pharmacistId": pharmacist["id"],
            "initialMeds": [{"id": aspirin, "quantity": -3}],
        })
        assert response.status_code == 400
        assert Pharmacy.query.count() == 0

    def test_unknown_initial_medication_writes_nothing(self, client, pharmacist):
        response = client.post("/api/pharmacies", json={
            "name": "Ghost stock", "pharmacistId": pharmacist["id"],
            "initialMeds": [{"id": 404, "quantity": 1}],
        })
        assert response.status_code == 404
        assert Pharmacy.query.count() == 0

    def test_infinite_coordinates_are_rejected(self, client, pharmacist):
        response = client.post("/api/pharmacies", json={
            "name": "Nowhere", "pharmacistId": pharmacist["id"], "latitude": float("inf"), "longitude": 0,
        })
        assert response.status_code == 400
        assert Pharmacy.query.count() == 0

    def test_delete_removes_stock(self, client, pharmacist, medication_id):
        aspirin = medication_id("Aspirin")
        pharmacy_id = create_pharmacy(client, pharmacist["id"], "Closing", initialMeds=[{"id": aspirin, "quantity": 1}])

        response = client.delete(f"/api/pharmacies/{pharmacy_id}")
        assert response.status_code == 200
        assert Pharmacy.query.count() == 0
        assert PharmacyStock.query.count() == 0
        assert client.delete(f"/api/pharmacies/{pharmacy_id}").status_code == 404

    def test_delete_by_non_owner_is_forbidden(self, client, pharmacist, login):
        other = login(email="other@example.com", type_="pharmacist")
        pharmacy_id = create_pharmacy(client, pharmacist["id"], "Mine")
        response = client.delete(f"/api/pharmacies/{pharmacy_id}?pharmacistId={other['id']}")
        assert response.status_code == 403
        assert Pharmacy.query.count() == 1


class TestStockUpsert:

    def test_repeated_upsert_keeps_one_row(self, client, pharmacist, medication_id):
        aspirin = medication_id("Aspirin")
        pharmacy_id = create_pharmacy(client, pharmacist["id"], "P")

        for _ in range(3):
            response = client.post(f"/api/pharmacies/{pharmacy_id}/stock", json={"medicationId": aspirin, "quantity": 7})
            assert response.status_code == 200

        rows = PharmacyStock.query.filter_by(pharmacy_id=pharmacy_id, medication_id=aspirin).all()
        assert len(rows) == 1
        assert rows[0].quantity == 7

    def test_last_write_wins(self, client, pharmacist, medication_id):
        aspirin = medication_id("Aspirin")
        pharmacy_id = create_pharmacy(client, pharmacist["id"], "P", initialMeds=[{"id": aspirin, "quantity": 2}])
        client.post(f"/api/pharmacies/{pharmacy_id}/stock", json={"medicationId": aspirin, "quantity": 30})
        assert PharmacyStock.query.one().quantity == 30

    def test_quantity_defaults_to_zero(self, client, pharmacist, medication_id):
        aspirin = medication_id("Aspirin")
        pharmacy_id = create_pharmacy(client, pharmacist["id"], "P")
        client.post(f"/api/pharmacies/{pharmacy_id}/stock", json={"medicationId": aspirin})
        assert PharmacyStock.query.one().quantity == 0

    def test_invalid_updates(self, client, pharmacist, medication_id):
        aspirin = medication_id("Aspirin")
        pharmacy_id = create_pharmacy(client, pharmacist["id"], "P")
        url = f"/api/pharmacies/{pharmacy_id}/stock"
        assert client.post(url, json={"quantity": 3}).status_code == 400
        assert client.post(url, json={"medicationId": aspirin, "quantity": -1}).status_code == 400
        assert client.post(url, json={"medicationId": aspirin, "quantity": 1.5}).status_code == 400
        overflowing = '{"medicationId": %d, "quantity": 1e400}' % aspirin
        assert client.post(url, data=overflowing, content_type="application/json").status_code == 400
        assert client.post("/api/pharmacies/999/stock", json={"medicationId": aspirin, "quantity": 1}).status_code == 404
        assert PharmacyStock.query.count() == 0


class TestSearch:

    def _setup(self, client, pharmacist, medication_id):
        aspirin = medication_id("Aspirin")
        stock = [{"id": aspirin, "quantity": 5}]
        # user stands in Casablanca
        create_pharmacy(client, pharmacist["id"], "Rabat Agdal", latitude=34.0, longitude=-6.85, initialMeds=stock)
        create_pharmacy(client, pharmacist["id"], "casa Maarif", latitude=33.58, longitude=-7.63, initialMeds=stock)
        create_pharmacy(client, pharmacist["id"], "Bouskoura", initialMeds=stock)
        create_pharmacy(client, pharmacist["id"], "Empty shelves", latitude=33.57, longitude=-7.59,
                        initialMeds=[{"id": aspirin, "quantity": 0}])
        return aspirin

    def test_sorted_by_distance_with_coordinates(self, client, pharmacist, medication_id):
        aspirin = self._setup(client, pharmacist, medication_id)

        body = client.get(f"/api/pharmacies/search?medId={aspirin}&lat=33.5731&lng=-7.5898").get_json()
        names = [p["name"] for p in body["pharmacies"]]
        assert names == ["casa Maarif", "Rabat Agdal", "Bouskoura"]
        distances = [p["distance"] for p in body["pharmacies"]]
        assert distances[0] < distances[1]
        assert distances[2] is None
        assert body["pharmacies"][0]["quantity"] == 5

    def test_sorted_by_name_without_coordinates(self, client, pharmacist, medication_id):
        aspirin = self._setup(client, pharmacist, medication_id)

        body = client.get(f"/api/pharmacies/search?medId={aspirin}").get_json()
        assert [p["name"] for p in body["pharmacies"]] == ["Bouskoura", "casa Maarif", "Rabat Agdal"]
        assert all(p["distance"] is None for p in body["pharmacies"])

    def test_unparseable_coordinates_fall_back_to_name(self, client, pharmacist, medication_id):
        aspirin = self._setup(client, pharmacist, medication_id)
        body = client.get(f"/api/pharmacies/search?medId={aspirin}&lat=here&lng=there").get_json()
        assert [p["name"] for p in body["pharmacies"]] == ["Bouskoura", "casa Maarif", "Rabat Agdal"]

    def test_med_id_is_required(self, client):
        assert client.get("/api/pharmacies/search").status_code == 400
