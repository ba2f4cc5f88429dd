from typing import List, Optional

from fastapi import APIRouter, status

from student_records_api.dependencies import CurrentStudent, NoteServiceDep
from student_records_api.schemas import ApiResponse, NoteOut, NoteWrite

router = APIRouter(prefix="/api/notes", tags=["Notes"])


# PUBLIC_INTERFACE
@router.get("", response_model=ApiResponse[List[NoteOut]], summary="List the student's notes")
def list_notes(student: CurrentStudent, notes: NoteServiceDep):
    """
    All notes of the authenticated student, newest first.
    """
    return ApiResponse[List[NoteOut]](
        message="Notes retrieved successfully",
        data=notes.list(student.id),
    )

# PUBLIC_INTERFACE
@router.get("/{note_id}", response_model=ApiResponse[NoteOut], summary="Get a single note")
def get_note(note_id: str, student: CurrentStudent, notes: NoteServiceDep):
    return ApiResponse[NoteOut](
        message="Note retrieved successfully",
        data=notes.get(note_id, student.id),
    )

# PUBLIC_INTERFACE
@router.post("", response_model=ApiResponse[NoteOut], status_code=status.HTTP_201_CREATED,
             summary="Create a new note")
def create_note(student: CurrentStudent, notes: NoteServiceDep,
                payload: Optional[NoteWrite] = None):
    return ApiResponse[NoteOut](
        message="Note created successfully",
        data=notes.create(payload, student.id),
    )

# PUBLIC_INTERFACE
@router.put("/{note_id}", response_model=ApiResponse[NoteOut], summary="Update a note")
def update_note(note_id: str, student: CurrentStudent, notes: NoteServiceDep,
                payload: Optional[NoteWrite] = None):
    """
    Replace title and content of a note owned by the authenticated student.
    """
    return ApiResponse[NoteOut](
        message="Note updated successfully",
        data=notes.update(note_id, payload, student.id),
    )

# PUBLIC_INTERFACE
@router.delete("/{note_id}", response_model=ApiResponse[NoteOut], summary="Delete a note")
def delete_note(note_id: str, student: CurrentStudent, notes: NoteServiceDep):
    """
    Delete a note owned by the authenticated student; returns the removed note.
    """
    return ApiResponse[NoteOut](
        message="Note deleted successfully",
        data=notes.delete(note_id, student.id),
    )
