def template_body(**overrides):
    body = {
        "name": "Mobile apps",
        "subject": "Thanks for your mobile app request",
        "body_html": "<p>Hello {{client_name}}, I will get back to you shortly.</p>",
        "conditions": {"project_type": "Mobile app", "budget_range": {"min": 5000, "max": 20000}},
    }
    body.update(overrides)
    return body


class TestAutoResponses:
    def test_create_and_list(self, client, fake_db, developer):
        created = client.post("/api/auto-responses", json=template_body(), headers=developer["headers"])

        assert created.status_code == 201
        stored = fake_db.rows("auto_response_templates")[0]
        assert stored["user_id"] == developer["id"]
        assert stored["conditions"] == {"project_type": "Mobile app", "budget_range": {"min": 5000, "max": 20000}}

        listed = client.get("/api/auto-responses", headers=developer["headers"]).json()
        assert [t["name"] for t in listed] == ["Mobile apps"]

    def test_budget_range_order(self, client, developer):
        response = client.post(
            "/api/auto-responses",
            json=template_body(conditions={"budget_range": {"min": 9000, "max": 1000}}),
            headers=developer["headers"],
        )
        assert response.status_code == 400

    def test_update_and_delete(self, client, fake_db, developer):
        template = client.post("/api/auto-responses", json=template_body(), headers=developer["headers"]).json()

        updated = client.put(
            f"/api/auto-responses/{template['id']}",
            json={"enabled": False},
            headers=developer["headers"],
        )
        assert updated.status_code == 200
        assert updated.json()["enabled"] is False

        assert client.delete(f"/api/auto-responses/{template['id']}", headers=developer["headers"]).status_code == 204
        assert fake_db.rows("auto_response_templates") == []

    def test_templates_are_private(self, client, fake_db, developer, pro_developer):
        template = fake_db.seed("auto_response_templates", user_id=pro_developer["id"], name="Theirs",
                                subject="Hi", body_html="<p>Hi</p>", enabled=True, conditions=None)

        assert client.get("/api/auto-responses", headers=developer["headers"]).json() == []
        response = client.put(
            f"/api/auto-responses/{template['id']}",
            json={"enabled": False},
            headers=developer["headers"],
        )
        assert response.status_code == 404

    def test_requires_authentication(self, client):
        assert client.get("/api/auto-responses").status_code == 401
