"""Fraud scoring endpoints: dry-run scoring and the rule table."""

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.database import get_session
from src.domains.fraud.config import default_config
from src.domains.fraud.models import FraudScoreRequest
from src.domains.fraud.rules import ALL_RULES
from src.domains.fraud.scorer import FraudScorer
from src.domains.nonprofits.resolution import resolve_nonprofit

logger = structlog.get_logger()
router = APIRouter(prefix="/api/v1/fraud", tags=["fraud"])

_scorer = FraudScorer()


@router.post("/score")
async def score_fraud(
    request: FraudScoreRequest,
    session: AsyncSession = Depends(get_session),  # noqa: B008
) -> dict:
    """Score a donation against the registry without recording it."""
    nonprofit = await resolve_nonprofit(
        session, ein=request.nonprofit_ein, name=request.nonprofit_name
    )
    verdict = _scorer.score(request.to_facts(), nonprofit)

    logger.info(
        "fraud_score_dry_run",
        fraud_score=verdict.fraud_score,
        status=verdict.status.value,
        nonprofit_resolved=nonprofit is not None,
    )

    return {
        "fraud_score": verdict.fraud_score,
        "is_fraudulent": verdict.is_fraudulent,
        "status": verdict.status.value,
        "risk_flags": verdict.risk_flags,
        "analysis": verdict.analysis,
        "nonprofit_resolved": nonprofit is not None,
    }


@router.get("/rules")
async def list_rules() -> dict:
    """Return the fixed rule table, in evaluation order, with thresholds."""
    config = default_config
    return {
        "rule_count": len(ALL_RULES),
        "rules": [
            {
                "rule_id": rule.rule_id,
                "category": rule.category,
                "weight": rule.weight(config),
                "flag": rule.flag,
                "analysis_key": rule.analysis_key.value if rule.analysis_key else None,
            }
            for rule in ALL_RULES
        ],
        "fraud_threshold": config.verdict.fraud_threshold,
        "amount_thresholds": {
            "average_donation": config.amount.average_donation,
            "max_normal_donation": config.amount.max_normal_donation,
        },
        "suspicious_phrases": list(config.patterns.suspicious_phrases),
    }
