"""
Tests for the pure panel transitions in ``panel_state``.

No application or API is involved: every transition is a function of
the current state and its input, so these tests only compare values.
"""

from roster.models.department import Department
from roster.models.employee import Employee
from roster.services import panel_state
from roster.services.panel_state import Effect


def _valid_employee(**overrides) -> Employee:
    fields = {
        "name": "Grace Hopper",
        "salary": "85000",
        "department_id": "1",
        "manager_id": "7",
        "date_of_joining": "2024-03-05",
        "designation": "Architect",
    }
    fields.update(overrides)
    return Employee(**fields)


class TestValidate:
    """Presence checks for required fields."""

    def test_valid_department_has_no_errors(self):
        draft = Department(name="Engineering", head_of_department="Alice")
        assert panel_state.validate(draft) == {}

    def test_blank_department_reports_both_fields(self):
        """Whitespace-only strings count as missing after trimming."""
        draft = Department(name="   ", head_of_department="")
        errors = panel_state.validate(draft)
        assert errors == {
            "name": "Department name is required.",
            "head_of_department": "HOD name is required.",
        }

    def test_only_missing_employee_fields_are_reported(self):
        draft = _valid_employee(salary="", manager_id=None, designation=" ")
        errors = panel_state.validate(draft)
        assert set(errors) == {"salary", "manager_id", "designation"}

    def test_empty_employee_reports_every_required_field(self):
        errors = panel_state.validate(Employee())
        assert set(errors) == set(Employee.REQUIRED_FIELDS)

    def test_zero_salary_is_present(self):
        """A numeric zero is a value, not an absent field."""
        assert panel_state.validate(_valid_employee(salary=0)) == {}


class TestOpenEditor:
    """Seeding and resetting the draft."""

    def test_open_without_record_gives_empty_draft(self):
        state = panel_state.initial_state(Department)
        state = panel_state.open_editor(state)
        assert state.editor_open
        assert state.draft == Department()
        assert not state.is_editing

    def test_open_with_record_copies_it(self):
        record = Department(id=4, name="Finance", head_of_department="Bob")
        state = panel_state.open_editor(panel_state.initial_state(Department), record)
        assert state.draft == record
        assert state.draft is not record
        assert state.is_editing

    def test_open_clears_previous_field_errors(self):
        state = panel_state.initial_state(Department)
        state, _ = panel_state.submit(state, Department())
        assert state.field_errors

        state = panel_state.open_editor(state)
        assert state.field_errors == {}

    def test_employee_draft_drops_time_of_day_for_the_date_input(self):
        record = _valid_employee(id=9, date_of_joining="2023-01-15T00:00:00.000Z")
        state = panel_state.open_editor(panel_state.initial_state(Employee), record)
        assert state.draft.date_of_joining == "2023-01-15"


class TestSubmit:
    """Choosing between create and update, and refusing bad drafts."""

    def test_invalid_draft_produces_no_effect(self):
        state = panel_state.initial_state(Department)
        state, effect = panel_state.submit(state, Department(name="Engineering"))

        assert effect is None
        assert state.editor_open
        assert set(state.field_errors) == {"head_of_department"}
        assert not state.in_flight

    def test_draft_without_id_is_created(self):
        state = panel_state.initial_state(Department)
        draft = Department(name="Engineering", head_of_department="Alice")
        state, effect = panel_state.submit(state, draft)

        assert effect == Effect(
            panel_state.CREATE,
            payload={"d_name": "Engineering", "dept_hod": "Alice"},
        )
        assert state.in_flight

    def test_draft_with_id_is_updated(self):
        state = panel_state.initial_state(Department)
        draft = Department(id=3, name="Ops", head_of_department="Carol")
        _, effect = panel_state.submit(state, draft)

        assert effect.action == panel_state.UPDATE
        assert effect.entity_id == 3

    def test_submit_is_refused_while_in_flight(self):
        state = panel_state.initial_state(Department)
        draft = Department(name="Engineering", head_of_department="Alice")
        state, first = panel_state.submit(state, draft)
        state, second = panel_state.submit(state, draft)

        assert first is not None
        assert second is None

    def test_unreadable_date_becomes_a_field_error(self):
        state = panel_state.initial_state(Employee)
        state, effect = panel_state.submit(
            state, _valid_employee(date_of_joining="next tuesday")
        )
        assert effect is None
        assert set(state.field_errors) == {"date_of_joining"}

    def test_employee_date_is_sent_as_plain_date(self):
        state = panel_state.initial_state(Employee)
        _, effect = panel_state.submit(
            state, _valid_employee(date_of_joining="2024-03-05T23:30:00-05:00")
        )
        assert effect.payload["date_of_join"] == "2024-03-05"


class TestMutationResults:
    """What happens after the API answers."""

    def _in_flight_update(self):
        state = panel_state.initial_state(Department)
        state = panel_state.open_editor(
            state, Department(id=3, name="Ops", head_of_department="Carol")
        )
        return panel_state.submit(state, state.draft)

    def test_success_closes_editor_notifies_and_relists(self):
        state, effect = self._in_flight_update()
        state, follow_up = panel_state.mutation_succeeded(state, effect)

        assert follow_up == Effect(panel_state.LIST)
        assert state.status == panel_state.LOADING
        assert not state.editor_open
        assert not state.in_flight
        assert state.notification.message == "Department updated successfully!"
        assert state.notification.duration_ms == 3000

    def test_create_and_delete_messages(self):
        state = panel_state.initial_state(Employee)
        created, _ = panel_state.mutation_succeeded(state, Effect(panel_state.CREATE))
        deleted, _ = panel_state.mutation_succeeded(state, Effect(panel_state.DELETE, 5))

        assert created.notification.message == "Employee added successfully!"
        assert deleted.notification.message == "Employee deleted successfully!"

    def test_failure_keeps_the_draft_and_records_the_error(self):
        state, _ = self._in_flight_update()
        draft = state.draft
        state = panel_state.mutation_failed(state, "Network Error")

        assert state.error == "Network Error"
        assert state.draft == draft
        assert not state.in_flight

    def test_dismissals(self):
        state = panel_state.initial_state(Department)
        state, _ = panel_state.mutation_succeeded(state, Effect(panel_state.CREATE))
        state = panel_state.mutation_failed(state, "boom")

        state = panel_state.dismiss_notification(panel_state.dismiss_error(state))
        assert state.notification is None
        assert state.error is None


class TestList:
    """Fetch transitions."""

    def test_loaded_replaces_items_wholesale(self):
        state = panel_state.initial_state(Department)
        state = panel_state.list_loaded(state, [Department(id=1, name="A")])
        state = panel_state.list_loaded(state, [Department(id=2, name="B")])

        assert [d.id for d in state.items] == [2]
        assert state.status == panel_state.LOADED

    def test_failure_enters_error_state(self):
        state = panel_state.list_failed(
            panel_state.initial_state(Department), "Request failed with status code 500"
        )
        assert state.status == panel_state.ERROR
        assert state.error == "Request failed with status code 500"


class TestDelete:
    """Confirmation step for deletes."""

    def test_confirm_without_request_does_nothing(self):
        state = panel_state.initial_state(Department)
        new_state, effect = panel_state.confirm_delete(state)
        assert effect is None
        assert new_state == state

    def test_request_then_confirm_describes_delete(self):
        state = panel_state.request_delete(panel_state.initial_state(Department), 8)
        state, effect = panel_state.confirm_delete(state)

        assert effect == Effect(panel_state.DELETE, entity_id=8)
        assert state.in_flight

    def test_cancel_clears_pending_delete(self):
        state = panel_state.request_delete(panel_state.initial_state(Department), 8)
        state = panel_state.cancel_delete(state)
        assert state.pending_delete is None
        _, effect = panel_state.confirm_delete(state)
        assert effect is None
