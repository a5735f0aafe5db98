from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status

from noteful_database.db import get_db

from .. import services
from ..schemas import NoteIn
from ..security import get_current_user_id
from ..serializers import note_to_dict

router = APIRouter(prefix="/api/notes", tags=["Notes"])


# PUBLIC_INTERFACE
@router.get("", summary="List the caller's notes")
def list_notes(
    search_term: Optional[str] = Query(None, alias="searchTerm", description="Case-sensitive match on title or content"),
    folder_id: Optional[str] = Query(None, alias="folderId", description="Only notes in this folder"),
    tag_id: Optional[str] = Query(None, alias="tagId", description="Only notes carrying this tag"),
    db=Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> List[Dict]:
    """
    Get all notes of the authenticated user, most recently updated first.
    Tags are expanded in every note.
    """
    notes = services.list_notes(db, user_id, search_term, folder_id, tag_id)
    return [note_to_dict(n) for n in notes]


# PUBLIC_INTERFACE
@router.get("/{note_id}", summary="Get a single note")
def get_note(note_id: str, db=Depends(get_db), user_id: int = Depends(get_current_user_id)) -> Dict:
    return note_to_dict(services.get_note(db, user_id, note_id))


# PUBLIC_INTERFACE
@router.post("", status_code=status.HTTP_201_CREATED, summary="Create a new note")
def create_note(
    note: NoteIn,
    request: Request,
    response: Response,
    db=Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Dict:
    """
    Create a new note for the authenticated user.
    Any owner given in the body is ignored.
    """
    created = services.create_note(db, user_id, note)
    response.headers["Location"] = f"{request.url.path}/{created.id}"
    return note_to_dict(created)


# PUBLIC_INTERFACE
@router.put("/{note_id}", summary="Replace a note")
def update_note(note_id: str, note: NoteIn, db=Depends(get_db), user_id: int = Depends(get_current_user_id)) -> Dict:
    return note_to_dict(services.update_note(db, user_id, note_id, note))


# PUBLIC_INTERFACE
@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a note")
def delete_note(note_id: str, db=Depends(get_db), user_id: int = Depends(get_current_user_id)):
    """Always answers 204, whether or not the note existed."""
    services.delete_note(db, user_id, note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
