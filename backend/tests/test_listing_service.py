"""
Tests for read-only listings: agenda, other cities, search and audit rows.
"""

from datetime import date

from app.Domains.Appointment.Models.appointment import AppointmentStatus
from app.Domains.Appointment.Services.listing_service import AuditField


class TestListings:
    def test_waiting_list_carries_expiry(self, lifecycle, listing, clock, make_intake):
        old = lifecycle.create(make_intake(full_name="Old"))
        clock.advance(days=26)
        priority = lifecycle.create(make_intake(full_name="Priority", is_priority=True))

        entries = listing.waiting_list()

        assert [e.appointment.id for e in entries] == [priority.id, old.id]
        assert entries[1].expiry.expiring_soon is True
        assert entries[0].expiry.days_waiting == 0

    def test_confirmed_ordered_by_schedule(self, lifecycle, listing, make_intake):
        late = lifecycle.create(make_intake())
        early = lifecycle.create(make_intake())
        lifecycle.confirm(late.id, date(2025, 3, 12), "08:10", daily_limit=5)
        lifecycle.confirm(early.id, date(2025, 3, 10), "14:10", daily_limit=5)

        assert [a.id for a in listing.confirmed()] == [early.id, late.id]

    def test_other_cities_grouped(self, lifecycle, listing, make_intake):
        lifecycle.create(make_intake(city="Buritis"))
        lifecycle.create(make_intake(city="Local"))
        arinos = lifecycle.create(make_intake(city="Arinos"))
        unai = lifecycle.create(make_intake(city="Unaí"))
        gone = lifecycle.create(make_intake(city="Unaí"))
        lifecycle.archive(gone.id)

        groups = listing.other_cities()

        assert set(groups) == {"Arinos", "Unaí"}
        assert [a.id for a in groups["Arinos"]] == [arinos.id]
        assert [a.id for a in groups["Unaí"]] == [unai.id]

    def test_search(self, lifecycle, listing, make_intake):
        maria = lifecycle.create(make_intake(full_name="Maria Souza", primary_contact="99999-2222"))
        carlos = lifecycle.create(make_intake(full_name="Carlos Pereira", address="Sítio Boa Vista"))

        assert [a.id for a in listing.search("maria")] == [maria.id]
        assert [a.id for a in listing.search("BOA VISTA")] == [carlos.id]
        assert [a.id for a in listing.search("2222")] == [maria.id]
    def test_blank_search_matches_everything(self, lifecycle, listing, make_intake):
        first = lifecycle.create(make_intake())
        second = lifecycle.create(make_intake(full_name="Carlos Pereira"))

        assert {a.id for a in listing.search("")} == {first.id, second.id}
        assert {a.id for a in listing.search("   ")} == {first.id, second.id}

    def test_by_status(self, lifecycle, listing, make_intake):
        a = lifecycle.create(make_intake())
        lifecycle.create(make_intake())
        lifecycle.archive(a.id)

        assert [x.id for x in listing.by_status(AppointmentStatus.ARCHIVED)] == [a.id]
        assert [x.id for x in listing.archived()] == [a.id]
        assert len(listing.by_status()) == 2


class TestAudit:
    def test_projection(self, lifecycle, listing, make_intake):
        a = lifecycle.create(make_intake(secondary_contact="3333-0000", notes="urgente"))
        lifecycle.confirm(a.id, date(2025, 3, 10), "08:10", daily_limit=5)

        rows = listing.audit(fields=[AuditField.NAME, AuditField.CONTACT, AuditField.DATE])

        assert rows == [
            {
                "id": a.id,
                "name": "João Silva",
                "contact": "99999-1111 / 3333-0000",
                "date": "2025-03-10T08:10:00",
            }
        ]

    def test_all_fields_by_default(self, lifecycle, listing, make_intake):
        lifecycle.create(make_intake())
        row = listing.audit()[0]
        assert set(row) == {"id", "name", "address", "contact", "date", "notes"}
        assert row["address"] == "Rua das Flores, 123 - Buritis"
        assert row["date"] is None

    def test_period_uses_schedule_then_creation(self, lifecycle, listing, make_intake):
        created_in_march = lifecycle.create(make_intake(full_name="created"))
        booked_in_april = lifecycle.create(make_intake(full_name="booked"))
        lifecycle.confirm(booked_in_april.id, date(2025, 4, 2), "08:10", daily_limit=5)

        march = listing.audit(start=date(2025, 3, 1), end=date(2025, 3, 31))
        april = listing.audit(start=date(2025, 4, 2), end=date(2025, 4, 2))

        assert [r["id"] for r in march] == [created_in_march.id]
        assert [r["id"] for r in april] == [booked_in_april.id]

    def test_status_filter(self, lifecycle, listing, make_intake):
        lifecycle.create(make_intake())
        b = lifecycle.create(make_intake())
        lifecycle.archive(b.id)

        rows = listing.audit(status=AppointmentStatus.ARCHIVED)
        assert [r["id"] for r in rows] == [b.id]

    def test_half_open_period_is_ignored(self, lifecycle, listing, make_intake):
        lifecycle.create(make_intake())
        assert len(listing.audit(start=date(2030, 1, 1))) == 1
