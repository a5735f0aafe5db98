from typing import Dict, List

from fastapi import APIRouter, Body, Depends, Request, Response, status

from noteful_database.db import get_db

from .. import services
from ..serializers import user_to_dict

router = APIRouter(prefix="/api/users", tags=["Users"])


# PUBLIC_INTERFACE
@router.post("", status_code=status.HTTP_201_CREATED, summary="Register a new user")
def register(request: Request, response: Response, payload: dict = Body(...), db=Depends(get_db)) -> Dict:
    """
    Register a new user.
    The body is checked field by field so the first broken rule is reported.
    Returns the newly created user record (excluding password).
    """
    user = services.create_user(db, payload)
    response.headers["Location"] = f"{request.url.path}/{user.id}"
    return user_to_dict(user)


# PUBLIC_INTERFACE
@router.get("", summary="List users")
def list_users(db=Depends(get_db)) -> List[Dict]:
    return [user_to_dict(u) for u in services.list_users(db)]


# PUBLIC_INTERFACE
@router.get("/{user_id}", summary="Get a single user")
def get_user(user_id: str, db=Depends(get_db)) -> Dict:
    return user_to_dict(services.get_user(db, user_id))
