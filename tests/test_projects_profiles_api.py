def project_body(slug="booking-app", **overrides):
    body = {
        "title": "Booking App",
        "slug": slug,
        "technologies": ["Flutter", "Supabase"],
        "client_type": "professional",
        "duration_value": "6",
        "published": True,
    }
    body.update(overrides)
    return body


def seed_project(fake_db, owner, slug, published=True, **values):
    return fake_db.seed(
        "projects",
        user_id=owner["id"],
        title=slug.replace("-", " ").title(),
        slug=slug,
        published=published,
        featured=False,
        technologies=[],
        **values,
    )


class TestProjects:
    def test_create_project(self, client, fake_db, developer):
        response = client.post("/api/projects", json=project_body(), headers=developer["headers"])

        assert response.status_code == 201
        body = response.json()
        assert body["user_id"] == developer["id"]
        assert body["duration_value"] == 6
        assert len(fake_db.rows("projects")) == 1

    def test_free_plan_project_limit(self, client, fake_db, developer):
        for i in range(3):
            seed_project(fake_db, developer, f"project-{i}")

        response = client.post("/api/projects", json=project_body(), headers=developer["headers"])

        assert response.status_code == 403
        assert "Project limit reached" in response.json()["detail"]

    def test_pro_plan_is_unlimited(self, client, fake_db, pro_developer):
        for i in range(10):
            seed_project(fake_db, pro_developer, f"project-{i}")
        response = client.post("/api/projects", json=project_body(), headers=pro_developer["headers"])
        assert response.status_code == 201

    def test_duplicate_slug(self, client, fake_db, developer):
        seed_project(fake_db, developer, "booking-app")
        response = client.post("/api/projects", json=project_body(), headers=developer["headers"])
        assert response.status_code == 409

    def test_invalid_slug(self, client, developer):
        response = client.post("/api/projects", json=project_body(slug="Not A Slug"), headers=developer["headers"])
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "slug"

    def test_list_published_filter(self, client, fake_db, developer):
        seed_project(fake_db, developer, "live")
        seed_project(fake_db, developer, "draft", published=False)

        everything = client.get("/api/projects", headers=developer["headers"]).json()
        published = client.get("/api/projects?published=true", headers=developer["headers"]).json()

        assert {p["slug"] for p in everything} == {"live", "draft"}
        assert [p["slug"] for p in published] == ["live"]

    def test_cannot_read_someone_elses_project(self, client, fake_db, developer, pro_developer):
        project = seed_project(fake_db, pro_developer, "secret")
        response = client.get(f"/api/projects/{project['id']}", headers=developer["headers"])
        assert response.status_code == 404

    def test_update_and_delete(self, client, fake_db, developer):
        project = seed_project(fake_db, developer, "booking-app")

        updated = client.put(
            f"/api/projects/{project['id']}",
            json=project_body(title="Booking App v2"),
            headers=developer["headers"],
        )
        assert updated.status_code == 200
        assert updated.json()["title"] == "Booking App v2"

        deleted = client.delete(f"/api/projects/{project['id']}", headers=developer["headers"])
        assert deleted.status_code == 204
        assert fake_db.rows("projects") == []


class TestProfile:
    def test_get_own_profile(self, client, developer):
        response = client.get("/api/profile", headers=developer["headers"])
        assert response.status_code == 200
        assert response.json()["username"] == "alice"

    def test_username_conflict(self, client, developer, pro_developer):
        response = client.put("/api/profile", json={"username": "bob"}, headers=developer["headers"])
        assert response.status_code == 409

    def test_invalid_color(self, client, developer):
        response = client.put("/api/profile", json={"primary_color": "blue"}, headers=developer["headers"])
        assert response.status_code == 400

    def test_usage(self, client, fake_db, developer):
        seed_project(fake_db, developer, "one")
        fake_db.seed("quotes", user_id=developer["id"], status="new")

        body = client.get("/api/profile/usage", headers=developer["headers"]).json()

        assert body["subscription_tier"] == "free"
        assert body["projects_count"] == 1
        assert body["quotes_this_month"] == 1
        assert body["can_create_project"] is True
        assert body["limits"]["max_projects"] == 3


class TestPortfolio:
    def test_public_portfolio_hides_private_data(self, client, fake_db):
        from tests.conftest import create_account

        owner = create_account(fake_db, username="dana", stripe_customer_id="cus_secret")
        seed_project(fake_db, owner, "live")
        seed_project(fake_db, owner, "draft", published=False)
        fake_db.seed("testimonials", user_id=owner["id"], client_name="Eve", client_email="eve@example.com",
                     rating=5, testimonial_text="Great work, on time.", approved=True, featured=False)
        fake_db.seed("testimonials", user_id=owner["id"], client_name="Mallory", client_email="m@example.com",
                     rating=1, testimonial_text="Pending moderation.", approved=False, featured=False)

        response = client.get("/api/portfolio/dana")

        assert response.status_code == 200
        body = response.json()
        assert "stripe_customer_id" not in body["profile"]
        assert "email" not in body["profile"]
        assert [p["slug"] for p in body["projects"]] == ["live"]
        assert [t["client_name"] for t in body["testimonials"]] == ["Eve"]
        assert "client_email" not in body["testimonials"][0]
        assert body["show_branding"] is True

    def test_paid_portfolio_has_no_branding(self, client, pro_developer):
        assert client.get("/api/portfolio/bob").json()["show_branding"] is False

    def test_unknown_portfolio(self, client):
        assert client.get("/api/portfolio/ghost").status_code == 404

    def test_public_project_detail(self, client, fake_db, developer):
        seed_project(fake_db, developer, "live")
        seed_project(fake_db, developer, "draft", published=False)

        assert client.get("/api/portfolio/alice/projects/live").status_code == 200
        assert client.get("/api/portfolio/alice/projects/draft").status_code == 404
