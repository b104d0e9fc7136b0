from datetime import datetime, timedelta, timezone

from innovaport.modules.quotes.service import should_send_reminder
from tests.conftest import create_account

CRON_HEADERS = {"X-Cron-Secret": "test-cron-secret"}


def seed_quote(fake_db, owner, **values):
    row = {
        "user_id": owner["id"],
        "name": "Claire Martin",
        "email": "claire@example.com",
        "project_type": "Mobile app",
        "budget": "10k-20k",
        "description": "A booking app for hair salons.",
        "status": "new",
        "consent_contact": True,
        "consent_privacy": True,
        "features": [],
        "reminders_count": 0,
    }
    row.update(values)
    return fake_db.seed("quotes", **row)


class TestSubmitQuote:
    def test_saves_quote_and_notifies_both_parties(self, client, fake_db, email_client, developer, quote_payload):
        response = client.post("/api/quotes", json=quote_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        stored = fake_db.rows("quotes")[0]
        assert stored["id"] == body["quote_id"]
        assert stored["user_id"] == developer["id"]
        assert stored["email"] == "claire@example.com"
        assert stored["status"] == "new"
        assert stored["project_type"] == "Mobile app"

        recipients = [m["to"] for m in email_client.sent]
        assert ["alice@example.com"] in recipients
        assert ["claire@example.com"] in recipients
        assert "Your quote request has been received" in email_client.subjects()

    def test_missing_field_is_a_400_with_field_errors(self, client, developer, quote_payload):
        del quote_payload["description"]
        response = client.post("/api/quotes", json=quote_payload)

        assert response.status_code == 400
        body = response.json()
        assert body["detail"] == "Validation error"
        assert "description" in [e["field"] for e in body["errors"]]

    def test_privacy_consent_is_required(self, client, developer, quote_payload):
        quote_payload["consentPrivacy"] = False
        response = client.post("/api/quotes", json=quote_payload)
        assert response.status_code == 400

    def test_unknown_portfolio(self, client, quote_payload):
        quote_payload["username"] = "nobody"
        response = client.post("/api/quotes", json=quote_payload)
        assert response.status_code == 404

    def test_free_plan_monthly_quota(self, client, fake_db, developer, quote_payload):
        for _ in range(3):
            assert client.post("/api/quotes", json=quote_payload).status_code == 201

        response = client.post("/api/quotes", json=quote_payload)

        assert response.status_code == 403
        assert len(fake_db.rows("quotes")) == 3

    def test_quotes_from_previous_months_do_not_count(self, client, fake_db, developer, quote_payload):
        for _ in range(3):
            seed_quote(fake_db, developer, created_at="2020-01-15T10:00:00+00:00")
        assert client.post("/api/quotes", json=quote_payload).status_code == 201

    def test_paid_plan_has_no_quota(self, client, fake_db, pro_developer, quote_payload):
        for _ in range(5):
            seed_quote(fake_db, pro_developer)
        quote_payload["username"] = "bob"
        assert client.post("/api/quotes", json=quote_payload).status_code == 201

    def test_email_failure_does_not_fail_submission(self, client, fake_db, email_client, developer, quote_payload):
        email_client.fail = True
        response = client.post("/api/quotes", json=quote_payload)
        assert response.status_code == 201
        assert len(fake_db.rows("quotes")) == 1

    def test_matching_auto_response_replaces_confirmation(self, client, fake_db, email_client, developer, quote_payload):
        fake_db.seed(
            "auto_response_templates",
            user_id=developer["id"],
            name="Mobile projects",
            subject="About your {{projectType}} project",
            body_html="Hi {{clientName}},\nthanks for the details.",
            conditions={"project_type": "Mobile app", "budget_range": {"min": 5000, "max": 25000}},
            enabled=True,
        )

        assert client.post("/api/quotes", json=quote_payload).status_code == 201

        subjects = email_client.subjects()
        assert "About your Mobile app project" in subjects
        assert "Your quote request has been received" not in subjects
        auto_mail = next(m for m in email_client.sent if m["subject"] == "About your Mobile app project")
        assert "Hi Claire Martin,<br>thanks for the details." in auto_mail["html"]
        assert auto_mail["reply_to"] == "alice@example.com"


class TestManageQuotes:
    def test_list_only_own_quotes(self, client, fake_db, developer, pro_developer):
        seed_quote(fake_db, developer)
        seed_quote(fake_db, pro_developer)

        response = client.get("/api/quotes", headers=developer["headers"])

        assert response.status_code == 200
        assert [q["user_id"] for q in response.json()] == [developer["id"]]

    def test_requires_authentication(self, client):
        assert client.get("/api/quotes").status_code == 401
        response = client.get("/api/quotes", headers={"Authorization": "Bearer bogus"})
        assert response.status_code == 401

    def test_other_users_quote_is_forbidden(self, client, fake_db, developer, pro_developer):
        quote = seed_quote(fake_db, pro_developer)
        response = client.patch(
            f"/api/quotes/{quote['id']}/status",
            json={"status": "accepted"},
            headers=developer["headers"],
        )
        assert response.status_code == 403

    def test_status_change_emails_client(self, client, fake_db, email_client, developer):
        quote = seed_quote(fake_db, developer)

        response = client.patch(
            f"/api/quotes/{quote['id']}/status",
            json={"status": "quoted"},
            headers=developer["headers"],
        )

        assert response.status_code == 200
        body = response.json()
        assert body["quote"]["status"] == "quoted"
        assert body["email_sent"] is True
        assert email_client.sent[0]["to"] == ["claire@example.com"]
        assert email_client.sent[0]["subject"].startswith("Update on your quote request")

    def test_status_change_respects_contact_consent(self, client, fake_db, email_client, developer):
        quote = seed_quote(fake_db, developer, consent_contact=False)
        response = client.patch(
            f"/api/quotes/{quote['id']}/status",
            json={"status": "rejected"},
            headers=developer["headers"],
        )
        assert response.status_code == 200
        assert response.json()["email_sent"] is None
        assert email_client.sent == []

    def test_invalid_status(self, client, fake_db, developer):
        quote = seed_quote(fake_db, developer)
        response = client.patch(
            f"/api/quotes/{quote['id']}/status",
            json={"status": "archived"},
            headers=developer["headers"],
        )
        assert response.status_code == 400

    def test_notes_are_saved(self, client, fake_db, developer):
        quote = seed_quote(fake_db, developer)
        response = client.patch(
            f"/api/quotes/{quote['id']}/notes",
            json={"internal_notes": "Call back on Monday"},
            headers=developer["headers"],
        )
        assert response.status_code == 200
        assert response.json()["internal_notes"] == "Call back on Monday"

    def test_respond_moves_new_quote_to_discussing(self, client, fake_db, email_client, developer):
        quote = seed_quote(fake_db, developer)

        response = client.post(
            f"/api/quotes/{quote['id']}/respond",
            json={"response": "  Happy to help, when can we talk?  "},
            headers=developer["headers"],
        )

        assert response.status_code == 200
        assert response.json()["quote"]["status"] == "discussing"
        assert "Happy to help, when can we talk?" in email_client.sent[0]["html"]

    def test_respond_reports_email_failure(self, client, fake_db, email_client, developer):
        quote = seed_quote(fake_db, developer)
        email_client.fail = True

        response = client.post(
            f"/api/quotes/{quote['id']}/respond",
            json={"response": "Hello"},
            headers=developer["headers"],
        )

        assert response.status_code == 502
        assert fake_db.rows("quotes")[0]["status"] == "new"

    def test_delete(self, client, fake_db, developer):
        quote = seed_quote(fake_db, developer)
        response = client.delete(f"/api/quotes/{quote['id']}", headers=developer["headers"])
        assert response.status_code == 204
        assert fake_db.rows("quotes") == []
        missing = client.delete(f"/api/quotes/{quote['id']}", headers=developer["headers"])
        assert missing.status_code == 404


class TestExportQuote:
    def test_free_plan_cannot_export(self, client, fake_db, developer):
        quote = seed_quote(fake_db, developer)
        response = client.get(f"/api/quotes/{quote['id']}/export?format=csv", headers=developer["headers"])
        assert response.status_code == 403

    def test_csv_export(self, client, fake_db, pro_developer):
        quote = seed_quote(fake_db, pro_developer)
        response = client.get(f"/api/quotes/{quote['id']}/export?format=csv", headers=pro_developer["headers"])

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert f'filename="quote-{quote["id"]}.csv"' in response.headers["content-disposition"]
        assert response.content.startswith(b"\xef\xbb\xbf")

    def test_pdf_export_is_printable_html(self, client, fake_db, pro_developer):
        quote = seed_quote(fake_db, pro_developer)
        response = client.get(f"/api/quotes/{quote['id']}/export?format=pdf", headers=pro_developer["headers"])
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "Claire Martin" in response.text

    def test_unknown_format(self, client, fake_db, pro_developer):
        quote = seed_quote(fake_db, pro_developer)
        response = client.get(f"/api/quotes/{quote['id']}/export?format=docx", headers=pro_developer["headers"])
        assert response.status_code == 400


class TestReminderSchedule:
    now = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)

    def test_due_on_configured_day(self):
        created = self.now - timedelta(days=3, hours=2)
        assert should_send_reminder(created, None, [3, 7, 14], self.now) == (True, 3)

    def test_not_due_between_configured_days(self):
        created = self.now - timedelta(days=5)
        assert should_send_reminder(created, None, [3, 7, 14], self.now) == (False, 5)

    def test_at_most_once_per_day(self):
        created = self.now - timedelta(days=7)
        assert should_send_reminder(created, self.now - timedelta(hours=3), [7], self.now)[0] is False
        assert should_send_reminder(created, self.now - timedelta(days=4), [7], self.now)[0] is True


class TestReminderSettings:
    def test_defaults_when_never_saved(self, client, developer):
        response = client.get("/api/quotes/reminder-settings", headers=developer["headers"])
        assert response.status_code == 200
        assert response.json()["reminder_days"] == [3, 7, 14]
        assert response.json()["enabled"] is True

    def test_save_normalizes_days(self, client, fake_db, developer):
        response = client.put(
            "/api/quotes/reminder-settings",
            json={"enabled": True, "reminder_days": [7, 2, 7], "notify_on_status_change": False},
            headers=developer["headers"],
        )
        assert response.status_code == 200
        assert response.json()["reminder_days"] == [2, 7]
        assert fake_db.rows("quote_reminder_settings")[0]["user_id"] == developer["id"]

    def test_out_of_range_day(self, client, developer):
        response = client.put(
            "/api/quotes/reminder-settings",
            json={"reminder_days": [0]},
            headers=developer["headers"],
        )
        assert response.status_code == 400


class TestSendReminders:
    def test_requires_cron_secret(self, client):
        assert client.post("/api/quotes/reminders").status_code == 401
        assert client.post("/api/quotes/reminders", headers={"X-Cron-Secret": "nope"}).status_code == 401

    def test_sends_due_reminders_once(self, client, fake_db, email_client, developer):
        fake_db.seed("quote_reminder_settings", user_id=developer["id"], enabled=True, reminder_days=[3])
        created = (datetime.now(timezone.utc) - timedelta(days=3, hours=1)).isoformat()
        due = seed_quote(fake_db, developer, created_at=created)
        seed_quote(fake_db, developer, created_at=created, status="accepted")

        first = client.post("/api/quotes/reminders", headers=CRON_HEADERS)

        assert first.status_code == 200
        assert first.json()["reminders_sent"] == 1
        assert email_client.sent[0]["to"] == ["alice@example.com"]
        stored = next(q for q in fake_db.rows("quotes") if q["id"] == due["id"])
        assert stored["reminders_count"] == 1
        assert stored["last_reminder_sent_at"] is not None

        second = client.post("/api/quotes/reminders", headers=CRON_HEADERS)
        assert second.json()["reminders_sent"] == 0

    def test_disabled_settings_are_skipped(self, client, fake_db, developer):
        other = create_account(fake_db, username="carol")
        fake_db.seed("quote_reminder_settings", user_id=other["id"], enabled=False, reminder_days=[3])
        response = client.post("/api/quotes/reminders", headers=CRON_HEADERS)
        assert response.json()["reminders_sent"] == 0
