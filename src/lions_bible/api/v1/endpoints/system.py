"""System and transparency endpoints for the Lions Bible API."""

from __future__ import annotations

from fastapi import APIRouter

from lions_bible.core.settings import settings
from lions_bible.models import FlagReason

router = APIRouter(prefix="/system", tags=["system", "transparency"])


@router.get("/config")
def get_public_config() -> dict[str, object]:
    """Return a sanitized snapshot of public runtime configuration.

    Excludes secrets and connection strings.
    """
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
        },
        "moderation": {
            "hide_thresholds": settings.moderation_thresholds,
            "report_reasons": [reason.value for reason in FlagReason],
        },
        "submissions": {
            "interpretation_min_words": settings.interpretation_min_words,
            "flag_explanation_max_words": settings.flag_explanation_max_words,
        },
    }
