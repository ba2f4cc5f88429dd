"""Note operations scoped to the authenticated student."""

import logging
from typing import List, Optional, Union

from student_records_api.errors import NotFoundError, ValidationError
from student_records_api.schemas import NoteOut, NoteWrite
from student_records_api.store import RecordStore

logger = logging.getLogger(__name__)

NOTE_FIELDS_REQUIRED = "Title and content are required"


def _parse_id(note_id: Union[int, str]) -> Optional[int]:
    if isinstance(note_id, int):
        return note_id
    # Anything that cannot be a stored id is simply not found.
    if note_id.isascii() and note_id.isdigit() and len(note_id) <= 18:
        return int(note_id)
    return None


def _require_text(payload: Optional[NoteWrite]):
    title = payload.title if payload is not None else None
    content = payload.content if payload is not None else None
    if not title or not title.strip() or not content or not content.strip():
        raise ValidationError(NOTE_FIELDS_REQUIRED)
    return title, content


# PUBLIC_INTERFACE
class NoteService:
    """CRUD on notes. ``student_id`` always comes from the auth gate."""

    def __init__(self, store: RecordStore):
        self.store = store

    def _owned(self, note_id: Union[int, str], student_id: int):
        parsed = _parse_id(note_id)
        note = self.store.find_note(parsed, student_id) if parsed is not None else None
        if note is None:
            # Absent and owned-by-someone-else look the same from outside.
            raise NotFoundError("Note", note_id)
        return note

    def list(self, student_id: int) -> List[NoteOut]:
        """All of the student's notes, newest first."""
        return [NoteOut.model_validate(n) for n in self.store.list_notes(student_id)]

    def get(self, note_id: Union[int, str], student_id: int) -> NoteOut:
        return NoteOut.model_validate(self._owned(note_id, student_id))

    def create(self, payload: Optional[NoteWrite], student_id: int) -> NoteOut:
        title, content = _require_text(payload)
        note = self.store.create_note(title, content, student_id)
        logger.info("Student %s created note %s", student_id, note.id)
        return NoteOut.model_validate(note)

    def update(self, note_id: Union[int, str], payload: Optional[NoteWrite], student_id: int) -> NoteOut:
        """Overwrites title and content of an owned note."""
        title, content = _require_text(payload)
        note = self._owned(note_id, student_id)
        return NoteOut.model_validate(self.store.update_note(note, title, content))

    def delete(self, note_id: Union[int, str], student_id: int) -> NoteOut:
        """Removes an owned note and returns its state before deletion."""
        note = self._owned(note_id, student_id)
        snapshot = NoteOut.model_validate(note)
        self.store.delete_note(note)
        logger.info("Student %s deleted note %s", student_id, note_id)
        return snapshot
