from typing import List

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.crud.users import get_user
from app.models.prediction import Prediction


def create_prediction(db: Session, user_id: int, crop: str, region: str, yield_estimate: float,
                      confidence: int, factors: list, recommendations: list) -> Prediction:
    if get_user(db, user_id) is None:
        raise NotFoundError("User not found", error="User not found")

    db_prediction = Prediction(
        user_id=user_id,
        crop=crop,
        region=region,
        yield_estimate=yield_estimate,
        confidence=confidence,
        factors=factors,
        recommendations=recommendations,
    )
    db.add(db_prediction)
    db.commit()
    db.refresh(db_prediction)
    return db_prediction


def list_predictions(db: Session, user_id: int, limit: int = 20) -> List[Prediction]:
    return (
        db.query(Prediction)
        .filter(Prediction.user_id == user_id)
        .order_by(Prediction.created_at.desc(), Prediction.id.desc())
        .limit(limit)
        .all()
    )
