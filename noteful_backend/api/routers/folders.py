from typing import Dict, List

from fastapi import APIRouter, Depends, Request, Response, status

from noteful_database.db import get_db

from .. import services
from ..schemas import FolderIn
from ..security import get_current_user_id
from ..serializers import folder_to_dict

router = APIRouter(prefix="/api/folders", tags=["Folders"])


# PUBLIC_INTERFACE
@router.get("", summary="List the caller's folders")
def list_folders(db=Depends(get_db), user_id: int = Depends(get_current_user_id)) -> List[Dict]:
    return [folder_to_dict(f) for f in services.list_folders(db, user_id)]


# PUBLIC_INTERFACE
@router.get("/{folder_id}", summary="Get a single folder")
def get_folder(folder_id: str, db=Depends(get_db), user_id: int = Depends(get_current_user_id)) -> Dict:
    return folder_to_dict(services.get_folder(db, user_id, folder_id))


# PUBLIC_INTERFACE
@router.post("", status_code=status.HTTP_201_CREATED, summary="Create a folder")
def create_folder(
    folder: FolderIn,
    request: Request,
    response: Response,
    db=Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict:
    """Folder names are unique per user."""
    created = services.create_folder(db, user_id, folder)
    response.headers["Location"] = f"{request.url.path}/{created.id}"
    return folder_to_dict(created)


# PUBLIC_INTERFACE
@router.put("/{folder_id}", summary="Rename a folder")
def update_folder(folder_id: str, folder: FolderIn, db=Depends(get_db), user_id: int = Depends(get_current_user_id)) -> Dict:
    return folder_to_dict(services.update_folder(db, user_id, folder_id, folder))


# PUBLIC_INTERFACE
@router.delete("/{folder_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a folder")
def delete_folder(folder_id: str, db=Depends(get_db), user_id: int = Depends(get_current_user_id)):
    """
    Delete a folder. Notes that were filed in it stay, without a folder.
    """
    services.delete_folder(db, user_id, folder_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
