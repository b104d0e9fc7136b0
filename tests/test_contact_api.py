def contact_body(**overrides):
    body = {
        "name": "Claire Martin",
        "email": "claire@example.com",
        "subject": "Partnership",
        "message": "Hello, I would like to talk about a partnership.",
    }
    body.update(overrides)
    return body


class TestContactForm:
    def test_submit_saves_and_confirms(self, client, fake_db, email_client):
        response = client.post("/api/contact", json=contact_body())

        assert response.status_code == 201
        saved = fake_db.rows("contact_messages")[0]
        assert saved["status"] == "new"
        assert response.json()["id"] == saved["id"]
        assert [m["to"] for m in email_client.sent] == [["claire@example.com"]]

    def test_message_too_short(self, client):
        response = client.post("/api/contact", json=contact_body(message="Hi"))
        assert response.status_code == 400

    def test_confirmation_failure_is_not_fatal(self, client, fake_db, email_client):
        email_client.fail = True
        response = client.post("/api/contact", json=contact_body())
        assert response.status_code == 201
        assert len(fake_db.rows("contact_messages")) == 1

    def test_rate_limited(self, client):
        statuses = [client.post("/api/contact", json=contact_body()).status_code for _ in range(6)]
        assert statuses[:5] == [201] * 5
        assert statuses[5] == 429


class TestNewsletter:
    def test_subscribe_then_already_subscribed(self, client, fake_db):
        first = client.post("/api/newsletter", json={"email": " Reader@Example.com"})
        second = client.post("/api/newsletter", json={"email": "reader@example.com"})

        assert first.status_code == 201
        assert second.status_code == 200
        assert second.json()["message"] == "You are already subscribed"
        assert [r["email"] for r in fake_db.rows("newsletter_subscriptions")] == ["reader@example.com"]

    def test_reactivates_unsubscribed_address(self, client, fake_db):
        row = fake_db.seed("newsletter_subscriptions", email="reader@example.com", status="unsubscribed",
                           unsubscribed_at="2026-01-01T00:00:00+00:00")

        response = client.post("/api/newsletter", json={"email": "reader@example.com"})

        assert response.status_code == 200
        assert response.json()["id"] == row["id"]
        assert fake_db.rows("newsletter_subscriptions")[0]["status"] == "active"
        assert fake_db.rows("newsletter_subscriptions")[0]["unsubscribed_at"] is None


class TestAdminMessages:
    def seed_message(self, fake_db):
        return fake_db.seed("contact_messages", name="Claire", email="claire@example.com",
                            subject="Question", message="Do you offer a yearly plan?", status="new")

    def test_requires_admin(self, client, developer):
        assert client.get("/api/admin/messages", headers=developer["headers"]).status_code == 403

    def test_list_messages(self, client, fake_db, admin_user):
        self.seed_message(fake_db)
        response = client.get("/api/admin/messages", headers=admin_user["headers"])
        assert response.status_code == 200
        assert [m["name"] for m in response.json()] == ["Claire"]

    def test_reply_marks_message_replied(self, client, fake_db, email_client, admin_user):
        message = self.seed_message(fake_db)

        response = client.post(
            f"/api/admin/messages/{message['id']}/reply",
            json={"replyMessage": "Yes, with two months free."},
            headers=admin_user["headers"],
        )

        assert response.status_code == 200
        assert email_client.sent[0]["to"] == ["claire@example.com"]
        assert "Yes, with two months free." in email_client.sent[0]["html"]
        assert fake_db.rows("contact_messages")[0]["status"] == "replied"
        assert fake_db.rows("contact_messages")[0]["replied_at"]

    def test_reply_to_unknown_message(self, client, admin_user):
        response = client.post(
            "/api/admin/messages/missing/reply",
            json={"replyMessage": "Hello"},
            headers=admin_user["headers"],
        )
        assert response.status_code == 404

    def test_reply_delivery_failure(self, client, fake_db, email_client, admin_user):
        message = self.seed_message(fake_db)
        email_client.fail = True

        response = client.post(
            f"/api/admin/messages/{message['id']}/reply",
            json={"replyMessage": "Hello"},
            headers=admin_user["headers"],
        )

        assert response.status_code == 502
        assert fake_db.rows("contact_messages")[0]["status"] == "new"
