from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth.security import get_current_user
from app.core.errors import NotFoundError
from app.crud.users import get_user
from app.db.session import get_db
from app.schemas.user import ProfileResponse, UserPublic, TokenData

router = APIRouter()


# --------------------------------------------------------------------
# Get current user -> GET /api/profile
# --------------------------------------------------------------------
@router.get("/profile", response_model=ProfileResponse)
def read_profile(
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user)
):
    db_user = get_user(db, current_user.id)
    if db_user is None:
        raise NotFoundError("User not found", error="User not found")
    return ProfileResponse(user=UserPublic.model_validate(db_user))
