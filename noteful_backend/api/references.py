"""
Ownership checks for the folder and tag references carried by a note.

A reference that does not exist and one owned by somebody else produce the
same error, so callers cannot probe for other users' folders or tags.
"""
import logging
from typing import Any, List, Optional

from noteful_database.models import Folder, Tag

from .errors import MalformedId, NotASequence, NotefulError, UnknownOrForeignFolder, UnknownOrForeignTag

logger = logging.getLogger(__name__)

# largest value a signed 64-bit primary key column can hold
MAX_ID = 2 ** 63 - 1


def parse_id(value: Any) -> Optional[int]:
    """Return `value` as a positive integer id, or None when it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str) and value.isdigit() and value.isascii():
        value = int(value)
    if isinstance(value, int) and 0 < value <= MAX_ID:
        return value
    return None


def require_id(value: Any, field: str = "id") -> int:
    parsed = parse_id(value)
    if parsed is None:
        raise MalformedId(field)
    return parsed


def is_absent(value: Any) -> bool:
    return value is None or value == ""


# PUBLIC_INTERFACE
def validate_folder_id(db, folder_id: Any, user_id: int) -> Optional[int]:
    """Returns the parsed folder id, or None when no folder was given."""
    if is_absent(folder_id):
        return None
    parsed = require_id(folder_id, "folderId")
    count = db.query(Folder).filter(Folder.id == parsed, Folder.user_id == user_id).count()
    if count == 0:
        raise UnknownOrForeignFolder()
    return parsed


# PUBLIC_INTERFACE
def validate_tag_ids(db, tags: Any, user_id: int) -> Optional[List[Tag]]:
    """Returns the caller's Tag rows for `tags`, or None when no tags were given."""
    if tags is None:
        return None
    if not isinstance(tags, list):
        raise NotASequence()

    requested = []
    for raw in tags:
        parsed = parse_id(raw)
        if parsed is None:
            # a malformed id can never match a stored tag
            raise UnknownOrForeignTag()
        if parsed not in requested:
            requested.append(parsed)
    if not requested:
        return []

    found = db.query(Tag).filter(Tag.id.in_(requested), Tag.user_id == user_id).all()
    if len(found) != len(requested):
        raise UnknownOrForeignTag()
    by_id = {tag.id: tag for tag in found}
    return [by_id[tag_id] for tag_id in requested]


# PUBLIC_INTERFACE
def validate_references(db, folder_id: Any, tags: Any, user_id: int):
    """
    Run both reference checks and return `(folder_id, tags)`.

    The checks are independent and share the request session, so they run
    one after the other; the order only breaks ties. Both are always
    evaluated, and when both fail the folder error is the one reported.
    """
    folder_error = tag_error = None
    parsed_folder = resolved_tags = None
    try:
        parsed_folder = validate_folder_id(db, folder_id, user_id)
    except NotefulError as err:
        folder_error = err
    try:
        resolved_tags = validate_tag_ids(db, tags, user_id)
    except NotefulError as err:
        tag_error = err

    error = folder_error or tag_error
    if error is not None:
        logger.info("Reference check failed for user %s: %s", user_id, error.message)
        raise error
    return parsed_folder, resolved_tags
