from typing import Any, Optional

from pydantic import BaseModel, Field


# Pydantic models for request bodies. Presence and reference checks happen
# in the services layer so the first violated rule decides the message.

class NoteIn(BaseModel):
    title: Optional[str] = Field(None, max_length=256)
    content: Optional[str] = Field(default=None, description="Note content")
    folder_id: Any = Field(None, alias="folderId", description="Id of one of the caller's folders")
    tags: Any = Field(None, description="Ids of the caller's tags")


class FolderIn(BaseModel):
    name: Optional[str] = Field(None, max_length=128)


class TagIn(BaseModel):
    name: Optional[str] = Field(None, max_length=128)


class Token(BaseModel):
    access_token: str
    token_type: str
