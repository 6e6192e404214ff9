from core.assign import AssignmentDraft


STUDENTS = [1, 2, 3, 4]


def test_opens_with_last_known_assignment():
    draft = AssignmentDraft(10, {2, 3})
    assert draft.selected == {2, 3}
    assert draft.select_all is False


def test_opens_empty_without_history():
    assert AssignmentDraft(10).selected == set()


def test_select_all_then_deselect_one():
    draft = AssignmentDraft(10)
    draft.toggle_select_all(STUDENTS)
    draft.toggle_student(3)

    assert len(draft.selected) == len(STUDENTS) - 1
    # the checkbox keeps its own state
    assert draft.select_all is True

    draft.toggle_select_all(STUDENTS)
    assert draft.selected == set(STUDENTS)


def test_checking_select_all_with_everyone_assigned_keeps_everyone():
    draft = AssignmentDraft(10, STUDENTS)
    draft.toggle_select_all(STUDENTS)

    assert draft.selected == set(STUDENTS)
    assert draft.select_all is True


def test_unchecking_select_all_clears():
    draft = AssignmentDraft(10)
    draft.toggle_select_all(STUDENTS)
    draft.toggle_select_all(STUDENTS)

    assert draft.selected == set()
    assert draft.select_all is False



def test_individual_toggles_do_not_touch_select_all():
    draft = AssignmentDraft(10)
    for sid in STUDENTS:
        draft.toggle_student(sid)

    assert draft.selected == set(STUDENTS)
    assert draft.select_all is False


def test_assign_then_reopen_prechecks_exactly_assigned(cache, server):
    server.add_student("A", "", "")
    server.add_student("B", "", "")
    server.add_subject("Math", subject_id=10)
    cache.refresh_students()
    cache.refresh_subjects()

    draft = AssignmentDraft(10, cache.assigned_to(10))
    draft.toggle_student(1)
    assert cache.assign_subject(10, draft.selected).ok

    reopened = AssignmentDraft(10, cache.assigned_to(10))
    assert [sid for sid in cache.students.ids() if reopened.is_selected(sid)] == [1]
