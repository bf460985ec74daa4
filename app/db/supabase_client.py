"""
Accès au store Supabase d'Estately

Une connexion partagée par processus; les routes la reçoivent via la
dépendance get_supabase (remplacée dans les tests).
"""
from typing import Dict
from supabase import create_client, Client
from functools import lru_cache
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)

# Tables attendues (voir supabase/schema.sql)
STORE_TABLES = ("buyers", "sellers", "admins", "properties", "appointments")


@lru_cache()
def get_supabase_client() -> Client:
    """
    Créer le client au premier appel puis le réutiliser

    Raises:
        Exception: URL ou clé Supabase invalide
    """
    try:
        logger.info(f"Connexion au store Supabase {settings.SUPABASE_URL}")
        return create_client(
            supabase_url=settings.SUPABASE_URL,
            supabase_key=settings.SUPABASE_KEY
        )
    except Exception as e:
        logger.error(f"Erreur initialisation Supabase: {e}")
        raise


def get_supabase() -> Client:
    """Dependency FastAPI: injecte le client dans les endpoints"""
    return get_supabase_client()


def check_store(db: Client) -> Dict[str, bool]:
    """
    Vérifier que chaque table du schéma répond

    Args:
        db: Client Supabase

    Returns:
        Table -> disponible; une table absente ou inaccessible vaut False
    """
    status = {}
    for table in STORE_TABLES:
        try:
            db.table(table).select("id").limit(1).execute()
            status[table] = True
        except Exception as e:
            logger.error(f"Table {table} indisponible: {e}")
            status[table] = False
    return status


__all__ = [
    "STORE_TABLES",
    "get_supabase_client",
    "get_supabase",
    "check_store",
]
