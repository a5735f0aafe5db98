import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from noteful_database.db import get_db

from ..schemas import Token
from ..security import authenticate_user, create_access_token, get_current_user_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Authentication"])


# PUBLIC_INTERFACE
@router.post("/login", response_model=Token, summary="Login and get JWT token")
def login(form_data: OAuth2PasswordRequestForm = Depends(), db=Depends(get_db)):
    """
    User login.
    Returns JWT access token on success.
    """
    user = authenticate_user(db, form_data.username, form_data.password)
    if not user:
        logger.info("Failed login attempt")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials.")
    access_token = create_access_token(data={"sub": str(user.id)})
    return {"access_token": access_token, "token_type": "bearer"}


# PUBLIC_INTERFACE
@router.post("/refresh", response_model=Token, summary="Exchange a valid token for a fresh one")
def refresh(user_id: int = Depends(get_current_user_id)):
    access_token = create_access_token(data={"sub": str(user_id)})
    return {"access_token": access_token, "token_type": "bearer"}
