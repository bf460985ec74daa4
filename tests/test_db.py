"""
Tests de la vérification du store
Exécuter: pytest tests/test_db.py -v
"""
from app.db import STORE_TABLES, check_store
from fake_supabase import FakeSupabase


def test_check_store_all_tables_available():
    assert check_store(FakeSupabase()) == {table: True for table in STORE_TABLES}


def test_check_store_reports_failing_table():
    db = FakeSupabase()
    db.fail_on = "appointments"

    tables = check_store(db)

    assert tables["appointments"] is False
    assert tables["buyers"] is True
