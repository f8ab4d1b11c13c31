"""Human-readable and JSON renderings of a quota response."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

import orjson

from .quota_models import ModelQuota, PlanSummary, UserQuota

RULE_WIDTH = 60
LABEL_WIDTH = 30

_EXHAUSTED = "⚫"
_LOW = "🔴"
_MEDIUM = "🟡"
_HEALTHY = "🟢"


def quota_indicator(fraction: float) -> str:
    if fraction <= 0:
        return _EXHAUSTED
    if fraction <= 0.3:
        return _LOW
    if fraction <= 0.5:
        return _MEDIUM
    return _HEALTHY


def format_reset_time(reset_time: Optional[datetime]) -> str:
    if reset_time is None:
        return "-"
    return reset_time.astimezone().strftime("%Y-%m-%d %H:%M")


def _credit_lines(plan: PlanSummary) -> List[str]:
    lines = []
    if plan.available_prompt_credits is not None:
        total = plan.monthly_prompt_credits if plan.monthly_prompt_credits is not None else 0
        fraction = plan.prompt_credit_fraction
        percent = f"{fraction * 100:.1f}%" if fraction is not None else "N/A"
        lines.append(f"  Prompt credits: {plan.available_prompt_credits} / {total} ({percent})")
    if plan.available_flow_credits is not None:
        total_flow = plan.monthly_flow_credits if plan.monthly_flow_credits is not None else "?"
        lines.append(f"  Flow credits:   {plan.available_flow_credits} / {total_flow}")
    return lines


def _model_line(model: ModelQuota) -> str:
    indicator = quota_indicator(model.remaining_fraction)
    percent = f"{model.remaining_percent:.1f}"
    return f"  {indicator} {model.label:<{LABEL_WIDTH}} | {percent:>5}% left | resets {format_reset_time(model.reset_time)}"


def render_summary(quota: UserQuota) -> str:
    """Render the quota as a plain-text report."""
    lines = [
        "=" * RULE_WIDTH,
        f"  User: {quota.name} ({quota.email})" if quota.email else f"  User: {quota.name}",
        f"  Plan: {quota.plan.plan_name}",
    ]
    lines.extend(_credit_lines(quota.plan))
    lines.append("=" * RULE_WIDTH)

    if not quota.models:
        lines.append("  No model quota data found in response.")
    else:
        lines.append("  Model quotas:")
        lines.append("  " + "-" * (RULE_WIDTH - 2))
        lines.extend(_model_line(model) for model in quota.models)
    lines.append("=" * RULE_WIDTH)
    return "\n".join(lines)


def render_json(payload: Dict[str, Any]) -> str:
    """Render the raw response as indented JSON."""
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8")


__all__ = ["format_reset_time", "quota_indicator", "render_json", "render_summary"]
