"""Typed view of the GetUserStatus response."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import MalformedResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelQuota:
    label: str
    model_id: Optional[str]
    remaining_fraction: float
    reset_time: Optional[datetime]

    @property
    def remaining_percent(self) -> float:
        return self.remaining_fraction * 100


@dataclass(frozen=True)
class PlanSummary:
    plan_name: str
    monthly_prompt_credits: Optional[int] = None
    monthly_flow_credits: Optional[int] = None
    available_prompt_credits: Optional[int] = None
    available_flow_credits: Optional[int] = None

    @property
    def prompt_credit_fraction(self) -> Optional[float]:
        if self.available_prompt_credits is None or not self.monthly_prompt_credits:
            return None
        return self.available_prompt_credits / self.monthly_prompt_credits


@dataclass(frozen=True)
class UserQuota:
    name: str
    email: str
    plan: PlanSummary
    models: Tuple[ModelQuota, ...] = ()
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


def _mapping(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _optional_int(value: Any) -> Optional[int]:
    # int64 fields arrive as JSON strings
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _fraction(value: Any) -> float:
    # remainingFraction is omitted when it is zero
    if value is None:
        return 0.0
    try:
        fraction = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(fraction):
        return 0.0
    return min(max(fraction, 0.0), 1.0)


def _timestamp(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unparseable reset time %r", value)
        return None


def _parse_models(configs: Any) -> List[ModelQuota]:
    models: List[ModelQuota] = []
    if not isinstance(configs, list):
        return models
    for config in configs:
        if not isinstance(config, dict) or not isinstance(config.get("quotaInfo"), dict):
            continue
        quota_info = config["quotaInfo"]
        models.append(
            ModelQuota(
                label=str(config.get("label") or "Unknown"),
                model_id=_mapping(config.get("modelOrAlias")).get("model"),
                remaining_fraction=_fraction(quota_info.get("remainingFraction")),
                reset_time=_timestamp(quota_info.get("resetTime")),
            )
        )
    return models


def parse_user_status(payload: Any) -> UserQuota:
    """
    Convert a decoded GetUserStatus body into a UserQuota.

    Raises:
        MalformedResponse: When the body is not an object or lacks ``userStatus``.
    """
    if not isinstance(payload, dict):
        raise MalformedResponse(f"Expected a JSON object, got {type(payload).__name__}")
    user_status = payload.get("userStatus")
    if not isinstance(user_status, dict):
        raise MalformedResponse("Response is missing the userStatus object")

    plan_status = _mapping(user_status.get("planStatus"))
    plan_info = _mapping(plan_status.get("planInfo"))
    plan = PlanSummary(
        plan_name=str(plan_info.get("planName") or "Unknown"),
        monthly_prompt_credits=_optional_int(plan_info.get("monthlyPromptCredits")),
        monthly_flow_credits=_optional_int(plan_info.get("monthlyFlowCredits")),
        available_prompt_credits=_optional_int(plan_status.get("availablePromptCredits")),
        available_flow_credits=_optional_int(plan_status.get("availableFlowCredits")),
    )
    model_configs = _mapping(user_status.get("cascadeModelConfigData")).get("clientModelConfigs")
    return UserQuota(
        name=str(user_status.get("name") or "Unknown"),
        email=str(user_status.get("email") or ""),
        plan=plan,
        models=tuple(_parse_models(model_configs)),
        raw=payload,
    )


__all__ = ["ModelQuota", "PlanSummary", "UserQuota", "parse_user_status"]
