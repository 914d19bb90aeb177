"""
Tests for the automatic archival of past-due confirmations.
"""

from datetime import date, datetime

from app.Domains.Appointment.Models.appointment import AppointmentStatus, AttendanceStatus
from app.Domains.Session.Models.session import SYSTEM_ACTOR, SessionContext


class TestArchivalSweep:
    """Tests for ArchivalSweep.run."""

    def test_scenario_archives_after_the_day(self, lifecycle, sweep, clock, make_intake):
        a = lifecycle.create(make_intake())
        lifecycle.confirm(a.id, date(2025, 3, 10), "08:10", daily_limit=1)

        clock.now = datetime(2025, 3, 10, 23, 59)
        assert sweep.run().archived == 0
        assert lifecycle.get(a.id).status == AppointmentStatus.CONFIRMED

        clock.now = datetime(2025, 3, 11, 0, 0)
        summary = sweep.run()

        archived = lifecycle.get(a.id)
        assert summary.archived_ids == [a.id]
        assert archived.status == AppointmentStatus.ARCHIVED
        assert archived.attendance is None
        assert archived.scheduled_at == datetime(2025, 3, 10, 8, 10)

    def test_sweep_records_system_actor(self, lifecycle, sweep, clock, make_intake):
        a = lifecycle.create(make_intake())
        staff = SessionContext(user_id="1542018")
        lifecycle.confirm(a.id, date(2025, 3, 10), "08:10", daily_limit=1, actor=staff)
        assert lifecycle.get(a.id).updated_by == "1542018"

        clock.now = datetime(2025, 3, 11, 8, 0)
        sweep.run()

        archived = lifecycle.get(a.id)
        assert archived.updated_by == SYSTEM_ACTOR
        assert archived.updated_at == datetime(2025, 3, 11, 8, 0)

    def test_today_and_future_untouched(self, lifecycle, sweep, clock, make_intake):
        clock.now = datetime(2025, 3, 10, 18, 0)
        earlier_today = lifecycle.create(make_intake())
        tomorrow = lifecycle.create(make_intake())
        lifecycle.confirm(earlier_today.id, date(2025, 3, 10), "08:10", daily_limit=5)
        lifecycle.confirm(tomorrow.id, date(2025, 3, 11), "08:10", daily_limit=5)

        assert sweep.run().archived == 0

    def test_only_confirmed_are_swept(self, lifecycle, sweep, clock, make_intake):
        waiting = lifecycle.create(make_intake())
        archived = lifecycle.create(make_intake())
        lifecycle.confirm(archived.id, date(2025, 3, 2), "08:10", daily_limit=5)
        lifecycle.archive(archived.id)
        lifecycle.set_attendance(archived.id, AttendanceStatus.DONE)

        clock.now = datetime(2025, 4, 1)
        assert sweep.run().archived == 0
        assert lifecycle.get(waiting.id).status == AppointmentStatus.WAITING
        assert lifecycle.get(archived.id).attendance == AttendanceStatus.DONE

    def test_idempotent(self, lifecycle, repository, sweep, clock, make_intake):
        for slot in ("08:10", "08:30"):
            appointment = lifecycle.create(make_intake())
            lifecycle.confirm(appointment.id, date(2025, 3, 2), slot, daily_limit=5)

        clock.now = datetime(2025, 3, 5)
        first = sweep.run()
        state_after_first = repository.list_all()
        second = sweep.run()

        assert first.archived == 2
        assert second.archived == 0
        assert repository.list_all() == state_after_first

    def test_no_write_when_nothing_changes(self, lifecycle, repository, sweep, make_intake):
        lifecycle.create(make_intake())
        writes = repository.write_count
        sweep.run()
        assert repository.write_count == writes

    def test_single_batch_write(self, lifecycle, repository, sweep, clock, make_intake):
        for slot in ("08:10", "08:30", "08:50"):
            appointment = lifecycle.create(make_intake())
            lifecycle.confirm(appointment.id, date(2025, 3, 2), slot, daily_limit=5)
        writes = repository.write_count

        clock.now = datetime(2025, 3, 3)
        sweep.run()
        assert repository.write_count == writes + 1
