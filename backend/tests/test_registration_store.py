"""Tests for the SQLAlchemy registration store."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.errors import PersistenceError
from app.models.registration import Registration, RegistrationStatus
from app.repository.registration_store import SqlAlchemyRegistrationStore

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_registration(payment_id, program_type="bootcamp", created_at=T0):
    return Registration(
        name="Ada",
        email="a@x.com",
        phone="555",
        location="Lagos",
        program_type=program_type,
        amount=Decimal("5000"),
        payment_id=payment_id,
        status=RegistrationStatus.PENDING.value,
        created_at=created_at,
    )


def test_insert_and_get(store):
    store.insert(make_registration("pay_1"))

    record = store.get("pay_1")
    assert record.id is not None
    assert record.status == "pending"
    assert record.paid_at is None


def test_get_unknown_returns_none(store):
    assert store.get("nope") is None


def test_duplicate_payment_id_rejected(store):
    store.insert(make_registration("pay_1"))

    with pytest.raises(PersistenceError):
        store.insert(make_registration("pay_1"))

    # Session is usable again after the rollback
    assert len(store.list()) == 1


def test_settle_only_from_pending(store):
    store.insert(make_registration("pay_1"))
    paid_at = T0 + timedelta(minutes=5)

    assert store.settle("pay_1", RegistrationStatus.SUCCESS, paid_at) is True
    assert store.settle("pay_1", RegistrationStatus.FAILED, paid_at + timedelta(minutes=1)) is False

    record = store.get("pay_1")
    assert record.status == "success"
    assert record.paid_at.replace(tzinfo=None) == paid_at.replace(tzinfo=None)


def test_settle_unknown_id_changes_nothing(store):
    store.insert(make_registration("pay_1"))

    assert store.settle("pay_2", RegistrationStatus.SUCCESS, T0) is False
    assert store.get("pay_1").status == "pending"


def test_settle_visible_to_other_sessions(session_factory):
    writer = SqlAlchemyRegistrationStore(session_factory())
    reader = SqlAlchemyRegistrationStore(session_factory())
    writer.insert(make_registration("pay_1"))
    assert reader.get("pay_1").status == "pending"
    reader.db.commit()

    writer.settle("pay_1", RegistrationStatus.FAILED, T0)
    # A competing delivery handled on another session loses the race
    assert reader.settle("pay_1", RegistrationStatus.SUCCESS, T0) is False

    assert reader.get("pay_1").status == "failed"


def test_list_newest_first_with_filter(store):
    store.insert(make_registration("old_boot", "bootcamp", T0))
    store.insert(make_registration("cohort", "cohort-3", T0 + timedelta(hours=1)))
    store.insert(make_registration("new_boot", "bootcamp", T0 + timedelta(hours=2)))

    assert [r.payment_id for r in store.list()] == ["new_boot", "cohort", "old_boot"]
    assert [r.payment_id for r in store.list("bootcamp")] == ["new_boot", "old_boot"]
    assert store.list("unknown") == []


def test_list_breaks_timestamp_ties_by_insert_order(store):
    store.insert(make_registration("first"))
    store.insert(make_registration("second"))

    assert [r.payment_id for r in store.list()] == ["second", "first"]
