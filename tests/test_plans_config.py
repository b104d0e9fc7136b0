from innovaport.config.plans_config import (
    can_create_project,
    can_receive_quote,
    get_plan_limits,
    has_feature,
    normalize_tier,
)


class TestPlanLimits:
    def test_free_plan_caps_projects_at_three(self):
        assert can_create_project("free", 2) is True
        assert can_create_project("free", 3) is False

    def test_free_plan_caps_quotes_at_three_per_month(self):
        assert can_receive_quote("free", 2) is True
        assert can_receive_quote("free", 3) is False

    def test_paid_plans_are_unlimited(self):
        for tier in ("pro", "premium"):
            assert can_create_project(tier, 10_000) is True
            assert can_receive_quote(tier, 10_000) is True

    def test_unknown_tier_falls_back_to_free(self):
        assert normalize_tier("enterprise") == "free"
        assert normalize_tier(None) == "free"
        assert get_plan_limits("enterprise") == get_plan_limits("free")


class TestFeatures:
    def test_exports_require_paid_plan(self):
        assert has_feature("free", "export_pdf") is False
        assert has_feature("pro", "export_pdf") is True
        assert has_feature("pro", "export_excel") is True

    def test_premium_only_features(self):
        assert has_feature("pro", "multi_users") is False
        assert has_feature("premium", "multi_users") is True

    def test_unknown_feature_is_disabled(self):
        assert has_feature("premium", "teleportation") is False
