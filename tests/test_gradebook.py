from core.gradebook import (
    NO_GRADE,
    assigned_names,
    cycle_index,
    students_frame,
    subject_at,
    subject_grades_frame,
    subject_roster,
)


def _seed(cache, server):
    ada = server.add_student("Ada", "Lovelace", "ada@x.y")
    alan = server.add_student("Alan", "Turing", "alan@x.y")
    grace = server.add_student("Grace", "Hopper", "grace@x.y")
    math = server.add_subject("Math")
    art = server.add_subject("Art")
    server.add_grade(alan, math, 88)
    cache.refresh_students()
    cache.refresh_subjects()
    cache.refresh_grades()
    cache.assign_subject(math, [ada])
    return ada, alan, grace, math, art


def test_students_frame_columns(cache, server):
    _seed(cache, server)
    frame = students_frame(cache)
    assert list(frame.columns) == ["ID", "First name", "Last name", "Email"]
    assert frame["Last name"].tolist() == ["Lovelace", "Turing", "Hopper"]


def test_roster_includes_assigned_and_graded(cache, server):
    ada, alan, grace, math, art = _seed(cache, server)

    assert subject_roster(cache, math) == [ada, alan]
    assert subject_roster(cache, art) == []


def test_subject_grades_frame_marks_missing_grades(cache, server):
    ada, alan, grace, math, art = _seed(cache, server)

    frame = subject_grades_frame(cache, math)

    assert frame["Student"].tolist() == ["Ada Lovelace", "Alan Turing"]
    assert frame["Grade"].tolist() == [NO_GRADE, "88"]
    assert subject_grades_frame(cache, art).empty


def test_assigned_names_skip_deleted_students(cache, server):
    ada, alan, grace, math, art = _seed(cache, server)
    cache.delete_student(ada)

    assert assigned_names(cache, cache.subjects.get(math)) == []


def test_cycle_index_wraps():
    assert cycle_index(0, -1, 3) == 2
    assert cycle_index(2, 1, 3) == 0
    assert cycle_index(5, 1, 0) == 0


def test_subject_at(cache, server):
    assert subject_at(cache, 0) is None
    _seed(cache, server)
    assert subject_at(cache, 1).name == "Art"
