import asyncio

from core.db import affected_rows
from leads import repository


def test_upsert_inserts_inside_locked_transaction(fake_db):
    fake_db.conn.fetchrow.return_value = None

    inserted = asyncio.run(
        repository.upsert_lead(fake_db, mobile="9876543210", pincode="560001", feedback="Hi", status="Open")
    )

    assert inserted is True
    assert fake_db.transactions == 1
    lock_call, insert_call = fake_db.conn.execute.await_args_list
    assert lock_call.args[1] == "9876543210:560001"
    assert insert_call.args[1:] == ("9876543210", "560001", "Hi", "Open")
    assert fake_db.conn.fetchrow.await_args.args[1:] == ("9876543210", "560001")


def test_upsert_updates_existing_rows(fake_db):
    fake_db.conn.fetchrow.return_value = {"ok": 1}

    inserted = asyncio.run(
        repository.upsert_lead(fake_db, mobile="1", pincode="2", feedback=None, status="Closed")
    )

    assert inserted is False
    update_call = fake_db.conn.execute.await_args_list[-1]
    assert "UPDATE lead_stored" in update_call.args[0]
    assert "timestamp = now()" in update_call.args[0]
    assert update_call.args[1:] == ("1", "2", None, "Closed")


def test_delete_returns_affected_count(fake_db):
    fake_db.execute.return_value = 3

    deleted = asyncio.run(repository.delete_leads(fake_db, mobile="1", pincode="2"))

    assert deleted == 3


def test_store_lead_leaves_timestamp_to_column_default(fake_db):
    asyncio.run(repository.insert_lead(fake_db, mobile="1", pincode="2", feedback=None, status=None))

    sql = fake_db.execute.await_args.args[0]
    assert "timestamp" not in sql


def test_affected_rows_parses_command_tags():
    assert affected_rows("DELETE 3") == 3
    assert affected_rows("INSERT 0 1") == 1
    assert affected_rows("UPDATE 0") == 0
    assert affected_rows("") == 0
    assert affected_rows("SELECT") == 0
