from typing import Dict, Optional

from noteful_database.models import Folder, Note, Tag, User


def _isoformat(value) -> Optional[str]:
    return value.isoformat() if value else None


# ---------- Serializers ----------
def tag_to_dict(t: Tag) -> Dict:
    return {
        "id": t.id,
        "name": t.name,
        "userId": t.user_id,
        "createdAt": _isoformat(t.created_at),
        "updatedAt": _isoformat(t.updated_at),
    }


def folder_to_dict(f: Folder) -> Dict:
    return {
        "id": f.id,
        "name": f.name,
        "userId": f.user_id,
        "createdAt": _isoformat(f.created_at),
        "updatedAt": _isoformat(f.updated_at),
    }


def note_to_dict(n: Note) -> Dict:
    return {
        "id": n.id,
        "title": n.title,
        "content": n.content,
        "folderId": n.folder_id,
        "userId": n.user_id,
        "tags": [tag_to_dict(t) for t in n.tags],
        "createdAt": _isoformat(n.created_at),
        "updatedAt": _isoformat(n.updated_at),
    }


def user_to_dict(u: User) -> Dict:
    # built field by field so the password hash can never leak
    return {
        "id": u.id,
        "username": u.username,
        "fullname": u.fullname,
    }
