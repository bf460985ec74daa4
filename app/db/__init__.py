from app.db.supabase_client import STORE_TABLES, check_store, get_supabase, get_supabase_client

__all__ = ["STORE_TABLES", "check_store", "get_supabase", "get_supabase_client"]
