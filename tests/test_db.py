from sqlalchemy import inspect

from student_records_db.db import build_engine, create_session_factory
from student_records_db.init_db import init_db
from student_records_db.models import Note, Student

def test_init_db_creates_tables():
    engine = build_engine("sqlite://")
    init_db(engine)
    assert {"students", "notes"} <= set(inspect(engine).get_table_names())

def test_session_factory_round_trip():
    engine = build_engine("sqlite://")
    init_db(engine)
    session = create_session_factory(engine)()
    try:
        student = Student(name="Ann", email="ann@example.com", password="digest")
        session.add(student)
        session.commit()
        session.add(Note(title="T", content="C", student_id=student.id))
        session.commit()
        assert session.query(Note).filter(Note.student_id == student.id).count() == 1
        assert student.created_at is not None
    finally:
        session.close()
