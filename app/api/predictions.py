import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.auth.security import get_current_user
from app.crud import predictions as prediction_store
from app.db.session import get_db
from app.schemas.prediction import (
    PredictionCreate,
    PredictionResult,
    PredictionHistory,
    PredictionRecord,
    YieldHistory,
)
from app.schemas.user import TokenData
from app.services import history
from app.services.predictor import predict_yield, PREDICTION_VALIDITY

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/predict", response_model=PredictionResult)
def create_prediction(
    request: PredictionCreate,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user)
):
    logger.info(
        "Prediction requested - Crop: %s, Region: %s, User: %s",
        request.crop, request.region, current_user.email,
    )
    outcome = predict_yield(request.crop, request.region)
    saved = prediction_store.create_prediction(
        db, current_user.id, request.crop, request.region, **outcome
    )

    return PredictionResult(
        id=saved.id,
        crop=saved.crop,
        region=saved.region,
        generated_at=saved.created_at,
        valid_until=saved.created_at + PREDICTION_VALIDITY,
        **outcome,
    )


@router.get("/my-predictions", response_model=PredictionHistory)
def read_my_predictions(
    limit: int = Query(20, ge=1, le=100, description="Most recent predictions to return"),
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user)
):
    predictions = prediction_store.list_predictions(db, current_user.id, limit=limit)
    return PredictionHistory(
        predictions=[PredictionRecord.model_validate(p) for p in predictions],
        count=len(predictions),
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/yield-history", response_model=YieldHistory)
def read_yield_history(
    crop: Optional[str] = Query(None, description="Filter by crop name"),
    years: Optional[int] = Query(None, ge=1, le=50, description="Only the most recent N years"),
    current_user: TokenData = Depends(get_current_user)
):
    logger.info("Yield history requested by: %s", current_user.email)
    rows = history.yield_history(crop=crop, years=years)
    return YieldHistory(
        data=rows,
        average_accuracy=history.average_accuracy(rows),
        total_years=len(rows),
        timestamp=datetime.now(timezone.utc),
    )
