"""Record-oriented access to students and notes.

``RecordStore`` wraps one SQLAlchemy session per request. Every note query is
filtered by the owning student id; SQLAlchemy faults surface as
``InfrastructureError`` after the session is rolled back.
"""

import logging
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from student_records_db.models import Note, Student
from student_records_api.errors import InfrastructureError, ValidationError
from student_records_api.schemas import StudentOut

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "Student with this email already exists"


class RecordStore:
    """Credential and note store over a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, message: str):
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("%s", message)
            raise InfrastructureError(message, exc) from exc

    # Students

    def find_student_by_email(self, email: str) -> Optional[Student]:
        """Full record including the password digest; for credential checks only."""
        with self._guard("Error fetching student"):
            return self.db.query(Student).filter(Student.email == email).first()

    def find_student_by_id(self, student_id: int) -> Optional[StudentOut]:
        """Public projection of a student, or None."""
        with self._guard("Error fetching student"):
            student = self.db.query(Student).filter(Student.id == student_id).first()
        return StudentOut.model_validate(student) if student is not None else None

    def create_student(self, name: str, email: str, hashed_password: str,
                       age: Optional[int] = None, grade: Optional[str] = None,
                       major: Optional[str] = None) -> Student:
        student = Student(
            name=name,
            email=email,
            password=hashed_password,
            age=age,
            grade=grade,
            major=major,
        )
        try:
            self.db.add(student)
            self.db.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent registration of the same email.
            self.db.rollback()
            if self.find_student_by_email(email) is not None:
                raise ValidationError(DUPLICATE_EMAIL_MESSAGE) from exc
            logger.exception("Error registering student")
            raise InfrastructureError("Error registering student", exc) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Error registering student")
            raise InfrastructureError("Error registering student", exc) from exc
        with self._guard("Error registering student"):
            self.db.refresh(student)
        return student

    # Notes

    def list_notes(self, student_id: int) -> List[Note]:
        with self._guard("Error fetching notes"):
            return (
                self.db.query(Note)
                .filter(Note.student_id == student_id)
                .order_by(Note.created_at.desc(), Note.id.desc())
                .all()
            )

    def find_note(self, note_id: int, student_id: int) -> Optional[Note]:
        """First note matching both id and owner."""
        with self._guard("Error retrieving note"):
            return (
                self.db.query(Note)
                .filter(Note.id == note_id, Note.student_id == student_id)
                .first()
            )

    def create_note(self, title: str, content: str, student_id: int) -> Note:
        note = Note(title=title, content=content, student_id=student_id)
        with self._guard("Error creating note"):
            self.db.add(note)
            self.db.commit()
            self.db.refresh(note)
        return note

    def update_note(self, note: Note, title: str, content: str) -> Note:
        with self._guard("Error updating note"):
            note.title = title
            note.content = content
            self.db.commit()
            self.db.refresh(note)
        return note

    def delete_note(self, note: Note) -> None:
        with self._guard("Error deleting note"):
            self.db.delete(note)
            self.db.commit()
