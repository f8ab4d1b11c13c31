"""Tests for quota rendering."""

import orjson
import pytest

from quota_probe.quota_models import ModelQuota, PlanSummary, UserQuota, parse_user_status
from quota_probe.summary_renderer import format_reset_time, quota_indicator, render_json, render_summary
from tests.helpers.quota_payloads import USER_STATUS_PAYLOAD


class TestQuotaIndicator:
    @pytest.mark.parametrize(
        "fraction, expected",
        [(0.0, "⚫"), (0.2, "🔴"), (0.3, "🔴"), (0.45, "🟡"), (0.5, "🟡"), (0.51, "🟢"), (1.0, "🟢")],
    )
    def test_thresholds(self, fraction, expected):
        assert quota_indicator(fraction) == expected


class TestRenderSummary:
    def test_includes_user_plan_and_models(self):
        text = render_summary(parse_user_status(USER_STATUS_PAYLOAD))

        assert "User: Ada Lovelace (ada@example.com)" in text
        assert "Plan: Pro" in text
        assert "Prompt credits: 12500 / 50000 (25.0%)" in text
        assert "Flow credits:   149000 / 150000" in text
        assert "Claude Sonnet 4.5" in text
        assert " 80.0% left" in text
        assert "⚫ Gemini 3 Pro (High)" in text

    def test_reports_missing_model_data(self):
        quota = UserQuota(name="Ada", email="", plan=PlanSummary(plan_name="Free"))

        text = render_summary(quota)

        assert "User: Ada\n" in text
        assert "No model quota data found in response." in text
        assert "Prompt credits" not in text

    def test_model_without_reset_time(self):
        model = ModelQuota(label="M", model_id=None, remaining_fraction=0.4, reset_time=None)
        quota = UserQuota(name="Ada", email="a@b", plan=PlanSummary(plan_name="Pro"), models=(model,))

        assert "resets -" in render_summary(quota)


class TestRenderHelpers:
    def test_format_reset_time_none(self):
        assert format_reset_time(None) == "-"

    def test_render_json_round_trips(self):
        assert orjson.loads(render_json(USER_STATUS_PAYLOAD)) == USER_STATUS_PAYLOAD
