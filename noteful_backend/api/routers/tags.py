from typing import Dict, List

from fastapi import APIRouter, Depends, Request, Response, status

from noteful_database.db import get_db

from .. import services
from ..schemas import TagIn
from ..security import get_current_user_id
from ..serializers import tag_to_dict

router = APIRouter(prefix="/api/tags", tags=["Tags"])


# PUBLIC_INTERFACE
@router.get("", summary="List the caller's tags")
def list_tags(db=Depends(get_db), user_id: int = Depends(get_current_user_id)) -> List[Dict]:
    return [tag_to_dict(t) for t in services.list_tags(db, user_id)]


# PUBLIC_INTERFACE
@router.get("/{tag_id}", summary="Get a single tag")
def get_tag(tag_id: str, db=Depends(get_db), user_id: int = Depends(get_current_user_id)) -> Dict:
    return tag_to_dict(services.get_tag(db, user_id, tag_id))


# PUBLIC_INTERFACE
@router.post("", status_code=status.HTTP_201_CREATED, summary="Create a tag")
def create_tag(
    tag: TagIn,
    request: Request,
    response: Response,
    db=Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict:
    created = services.create_tag(db, user_id, tag)
    response.headers["Location"] = f"{request.url.path}/{created.id}"
    return tag_to_dict(created)


# PUBLIC_INTERFACE
@router.put("/{tag_id}", summary="Rename a tag")
def update_tag(tag_id: str, tag: TagIn, db=Depends(get_db), user_id: int = Depends(get_current_user_id)) -> Dict:
    return tag_to_dict(services.update_tag(db, user_id, tag_id, tag))


# PUBLIC_INTERFACE
@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a tag")
def delete_tag(tag_id: str, db=Depends(get_db), user_id: int = Depends(get_current_user_id)):
    """Delete a tag and drop it from every note that carried it."""
    services.delete_tag(db, user_id, tag_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
