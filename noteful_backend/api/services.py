"""
Create, read, update and delete operations for notes, folders, tags and users.

Every operation is scoped to the authenticated caller: the owner column is
always set from `user_id`, never from the request body, and a lookup that
misses is reported as not found whether or not the row belongs to someone
else. Unique constraints in the database are the final word on duplicate
names; the queries run beforehand only produce a friendlier error sooner.
"""
import logging
from contextlib import contextmanager
from typing import List, Optional, Type

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from noteful_database.models import Folder, Note, Tag, User, note_tags, utcnow

from .errors import DuplicateName, DuplicateUsername, MissingField, NotefulError, NotFound, StorageFailure, TypeMismatch
from .references import parse_id, require_id, validate_references
from .schemas import FolderIn, NoteIn, TagIn
from .security import get_password_hash, validate_credentials

logger = logging.getLogger(__name__)


@contextmanager
def persisting(db, conflict: Optional[NotefulError] = None):
    """Roll back and translate store errors raised inside the block."""
    try:
        yield
    except IntegrityError as err:
        db.rollback()
        if conflict is None:
            logger.exception("Unexpected integrity error")
            raise StorageFailure() from err
        logger.info("Unique constraint rejected write: %s", conflict.message)
        raise conflict from err
    except SQLAlchemyError as err:
        db.rollback()
        logger.exception("Storage failure")
        raise StorageFailure() from err


def _commit(db, instance, conflict: Optional[NotefulError] = None):
    with persisting(db, conflict):
        db.commit()
    db.refresh(instance)
    return instance


#####################
# NOTES
#####################

# PUBLIC_INTERFACE
def list_notes(
    db,
    user_id: int,
    search_term: Optional[str] = None,
    folder_id: Optional[str] = None,
    tag_id: Optional[str] = None,
) -> List[Note]:
    """
    Return the caller's notes, most recently updated first.
    `search_term` matches title or content as a case-sensitive substring.
    """
    query = db.query(Note).filter(Note.user_id == user_id)
    if search_term:
        # LIKE narrows the rows; some backends compare case-insensitively,
        # so the exact check below is what decides
        pattern = Note.title.contains(search_term, autoescape=True) | Note.content.contains(
            search_term, autoescape=True
        )
        query = query.filter(pattern)
    if folder_id:
        query = query.filter(Note.folder_id == require_id(folder_id, "folderId"))
    if tag_id:
        query = query.filter(Note.tags.any(Tag.id == require_id(tag_id, "tagId")))

    notes = query.order_by(Note.updated_at.desc(), Note.id.desc()).all()
    if search_term:
        notes = [n for n in notes if search_term in (n.title or "") or search_term in (n.content or "")]
    return notes


def _owned_note(db, note_id: int, user_id: int) -> Optional[Note]:
    return db.query(Note).filter(Note.id == note_id, Note.user_id == user_id).first()


# PUBLIC_INTERFACE
def get_note(db, user_id: int, note_id: str) -> Note:
    note = _owned_note(db, require_id(note_id), user_id)
    if note is None:
        raise NotFound()
    return note


# PUBLIC_INTERFACE
def create_note(db, user_id: int, payload: NoteIn) -> Note:
    """Validate and store a new note owned by `user_id`."""
    if not payload.title:
        raise MissingField("title")
    folder_id, tags = validate_references(db, payload.folder_id, payload.tags, user_id)

    note = Note(
        title=payload.title,
        content=payload.content,
        folder_id=folder_id,
        user_id=user_id,
        tags=tags or [],
    )
    db.add(note)
    _commit(db, note)
    logger.info("Created note %s for user %s", note.id, user_id)
    return note


# PUBLIC_INTERFACE
def update_note(db, user_id: int, note_id: str, payload: NoteIn) -> Note:
    """Replace the mutable fields of one of the caller's notes."""
    parsed_id = require_id(note_id)
    if not payload.title:
        raise MissingField("title")
    folder_id, tags = validate_references(db, payload.folder_id, payload.tags, user_id)

    note = _owned_note(db, parsed_id, user_id)
    if note is None:
        raise NotFound()
    note.title = payload.title
    note.content = payload.content
    note.folder_id = folder_id
    note.tags = tags or []
    # tag links live in another table, so bump the timestamp explicitly
    note.updated_at = utcnow()
    return _commit(db, note)


# PUBLIC_INTERFACE
def delete_note(db, user_id: int, note_id: str) -> None:
    """Delete one of the caller's notes. Missing ids are not an error."""
    parsed_id = parse_id(note_id)
    if parsed_id is None:
        return
    note = _owned_note(db, parsed_id, user_id)
    if note is None:
        return
    with persisting(db):
        db.delete(note)
        db.commit()


#####################
# FOLDERS AND TAGS
#####################

def _require_name(name: Optional[str]) -> str:
    if not name:
        raise MissingField("name")
    return name


def _name_taken(db, model: Type, name: str, user_id: int, exclude_id: Optional[int] = None) -> bool:
    query = db.query(model.id).filter(model.name == name, model.user_id == user_id)
    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)
    return query.first() is not None


def _list_named(db, model: Type, user_id: int):
    return db.query(model).filter(model.user_id == user_id).order_by(model.name).all()


def _get_named(db, model: Type, user_id: int, item_id: str):
    item = db.query(model).filter(model.id == require_id(item_id), model.user_id == user_id).first()
    if item is None:
        raise NotFound()
    return item


def _create_named(db, model: Type, user_id: int, name: Optional[str]):
    name = _require_name(name)
    conflict = DuplicateName(model.__name__)
    if _name_taken(db, model, name, user_id):
        raise conflict
    item = model(name=name, user_id=user_id)
    db.add(item)
    _commit(db, item, conflict)
    logger.info("Created %s %s for user %s", model.__name__.lower(), item.id, user_id)
    return item


def _update_named(db, model: Type, user_id: int, item_id: str, name: Optional[str]):
    parsed_id = require_id(item_id)
    name = _require_name(name)
    item = db.query(model).filter(model.id == parsed_id, model.user_id == user_id).first()
    if item is None:
        raise NotFound()
    conflict = DuplicateName(model.__name__)
    if _name_taken(db, model, name, user_id, exclude_id=parsed_id):
        raise conflict
    item.name = name
    return _commit(db, item, conflict)


# PUBLIC_INTERFACE
def list_folders(db, user_id: int) -> List[Folder]:
    return _list_named(db, Folder, user_id)


# PUBLIC_INTERFACE
def get_folder(db, user_id: int, folder_id: str) -> Folder:
    return _get_named(db, Folder, user_id, folder_id)


# PUBLIC_INTERFACE
def create_folder(db, user_id: int, payload: FolderIn) -> Folder:
    return _create_named(db, Folder, user_id, payload.name)


# PUBLIC_INTERFACE
def update_folder(db, user_id: int, folder_id: str, payload: FolderIn) -> Folder:
    return _update_named(db, Folder, user_id, folder_id, payload.name)


# PUBLIC_INTERFACE
def delete_folder(db, user_id: int, folder_id: str) -> None:
    """Delete a folder and detach it from the caller's notes that referenced it."""
    parsed_id = parse_id(folder_id)
    if parsed_id is None:
        return
    folder = db.query(Folder).filter(Folder.id == parsed_id, Folder.user_id == user_id).first()
    if folder is None:
        return
    with persisting(db):
        db.query(Note).filter(Note.folder_id == folder.id).update(
            {Note.folder_id: None}, synchronize_session=False
        )
        db.delete(folder)
        db.commit()


# PUBLIC_INTERFACE
def list_tags(db, user_id: int) -> List[Tag]:
    return _list_named(db, Tag, user_id)


# PUBLIC_INTERFACE
def get_tag(db, user_id: int, tag_id: str) -> Tag:
    return _get_named(db, Tag, user_id, tag_id)


# PUBLIC_INTERFACE
def create_tag(db, user_id: int, payload: TagIn) -> Tag:
    return _create_named(db, Tag, user_id, payload.name)


# PUBLIC_INTERFACE
def update_tag(db, user_id: int, tag_id: str, payload: TagIn) -> Tag:
    return _update_named(db, Tag, user_id, tag_id, payload.name)


# PUBLIC_INTERFACE
def delete_tag(db, user_id: int, tag_id: str) -> None:
    """Delete a tag and remove it from every note that carried it."""
    parsed_id = parse_id(tag_id)
    if parsed_id is None:
        return
    tag = db.query(Tag).filter(Tag.id == parsed_id, Tag.user_id == user_id).first()
    if tag is None:
        return
    with persisting(db):
        db.execute(note_tags.delete().where(note_tags.c.tag_id == tag.id))
        db.delete(tag)
        db.commit()


#####################
# USERS
#####################

# PUBLIC_INTERFACE
def list_users(db) -> List[User]:
    return db.query(User).order_by(User.id).all()


# PUBLIC_INTERFACE
def get_user(db, user_id: str) -> User:
    user = db.query(User).filter(User.id == require_id(user_id)).first()
    if user is None:
        raise NotFound()
    return user


# PUBLIC_INTERFACE
def create_user(db, payload: dict) -> User:
    """
    Register a new user.
    The password is validated, hashed, and never stored or returned in clear.
    """
    validate_credentials(payload)
    fullname = payload.get("fullname")
    if fullname is not None and not isinstance(fullname, str):
        raise TypeMismatch("fullname")

    username = payload["username"]
    if db.query(User.id).filter(User.username == username).first() is not None:
        raise DuplicateUsername()

    user = User(
        username=username,
        fullname=fullname.strip() if fullname else fullname,
        hashed_password=get_password_hash(payload["password"]),
    )
    db.add(user)
    _commit(db, user, DuplicateUsername())
    logger.info("Registered user %s", user.id)
    return user
