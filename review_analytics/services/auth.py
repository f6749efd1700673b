from typing import Optional

from sqlalchemy.orm import Session

from review_analytics.core.security import verify_password
from review_analytics.models.user import User


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user
