"""
Admin API: read-only view of the active scoring configuration.

GET /v1/admin/config
  → category thresholds, factor weights and financial bands in effect.
    Thresholds come from settings (CATEGORY_1_MIN_SCORE / CATEGORY_2_MIN_SCORE).
"""
from __future__ import annotations

from dataclasses import asdict

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.assessment_endpoint import get_engine
from app.scoring.engine import CATEGORY_TO_COLOR, AssessmentEngine
from app.scoring.factors import FINANCIAL_BANDS, WEIGHT_BANDS

logger = structlog.get_logger()
router = APIRouter(prefix="/v1/admin", tags=["admin"])


# ── Pydantic Schemas ──

class CategoryBandResponse(BaseModel):
    category: str
    color: str
    min_score: float


class ScoreBandResponse(BaseModel):
    threshold: float
    score: float
    label: str


class ScoringConfigResponse(BaseModel):
    model_version: str
    categories: list[CategoryBandResponse]
    financial_bands: list[ScoreBandResponse]
    weight_bands: list[ScoreBandResponse]
    dependent_weights: dict[str, float]
    social_status_weights: dict[str, float]


@router.get("/config", response_model=ScoringConfigResponse)
async def get_config(engine: AssessmentEngine = Depends(get_engine)) -> ScoringConfigResponse:
    config = engine.config
    min_scores = [config.category_1_min_score, config.category_2_min_score, 0.0]

    logger.info("scoring_config_read", model_version=engine.model_version)

    return ScoringConfigResponse(
        model_version=engine.model_version,
        categories=[
            CategoryBandResponse(category=category.value, color=color.value, min_score=min_score)
            for (category, color), min_score in zip(CATEGORY_TO_COLOR.items(), min_scores)
        ],
        financial_bands=[
            ScoreBandResponse(threshold=upper, score=score, label=label)
            for upper, score, label in FINANCIAL_BANDS
        ],
        weight_bands=[
            ScoreBandResponse(threshold=lower, score=score, label=label)
            for lower, score, label in WEIGHT_BANDS
        ],
        dependent_weights=asdict(config.dependent_weights),
        social_status_weights=asdict(config.social_status_weights),
    )
