# app/crud/user.py
"""
Opérations CRUD pour les identités (acheteurs, vendeurs, admins)

Chaque rôle a sa propre table; l'unicité de l'email et du username
n'est garantie qu'à l'intérieur d'une même table.
Les enregistrements renvoyés sont des dict bruts contenant `password_hash`:
les endpoints les convertissent en UserPublic avant de répondre.
"""

from typing import Optional, List, Dict, Any, Tuple
from supabase import Client
import logging
import uuid

from app.core.security import hash_password
from app.models import UserRole

logger = logging.getLogger(__name__)

TABLES = {
    UserRole.BUYER: "buyers",
    UserRole.SELLER: "sellers",
    UserRole.ADMIN: "admins",
}

# Clé de tri exposée (camelCase ou snake_case) -> colonne
SORTABLE_FIELDS = {
    "name": "name",
    "username": "username",
    "email": "email",
    "phoneNumber": "phone_number",
    "phone_number": "phone_number",
    "createdAt": "created_at",
    "created_at": "created_at",
}

SEARCH_FIELDS = ("name", "email", "username", "phone_number")


def is_valid_id(value: Optional[str]) -> bool:
    """Un identifiant mal formé ne peut désigner aucun enregistrement"""
    try:
        uuid.UUID(str(value))
        return True
    except (ValueError, TypeError):
        return False


def _normalize(data: Dict[str, Any]) -> Dict[str, Any]:
    data = dict(data)
    for key in ("username", "email"):
        if isinstance(data.get(key), str):
            data[key] = data[key].strip().lower()
    for key in ("name", "phone_number"):
        if isinstance(data.get(key), str):
            data[key] = data[key].strip()
    return data


class UserCRUD:
    """Classe pour gérer les opérations CRUD sur une table d'identités"""

    def __init__(self, db: Client, role: UserRole):
        self.db = db
        self.role = UserRole(role)
        self.table_name = TABLES[self.role]

    def create(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Créer une identité

        Args:
            user_data: name, username, email, password, phone_number

        Returns:
            Enregistrement créé
        """
        try:
            data = _normalize(user_data)
            data["password_hash"] = hash_password(data.pop("password"))
            data["role"] = self.role.value
            if self.role == UserRole.ADMIN:
                data.pop("phone_number", None)

            response = self.db.table(self.table_name).insert(data).execute()

            if not response.data:
                raise Exception("Aucune donnée retournée après insertion")

            logger.info(f"{self.role.value} créé: {response.data[0]['id']}")
            return response.data[0]

        except Exception as e:
            logger.error(f"Erreur création {self.role.value}: {e}")
            raise

    def get_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        if not is_valid_id(user_id):
            return None
        try:
            response = self.db.table(self.table_name)\
                .select("*")\
                .eq("id", user_id)\
                .execute()

            return response.data[0] if response.data else None

        except Exception as e:
            logger.error(f"Erreur récupération {self.role.value} {user_id}: {e}")
            raise

    def get_by_ids(self, user_ids: List[str]) -> List[Dict[str, Any]]:
        ids = [i for i in set(user_ids) if is_valid_id(i)]
        if not ids:
            return []
        try:
            response = self.db.table(self.table_name)\
                .select("*")\
                .in_("id", ids)\
                .execute()
            return response.data

        except Exception as e:
            logger.error(f"Erreur récupération {self.table_name}: {e}")
            raise

    def _get_by(self, column: str, value: Optional[str]) -> Optional[Dict[str, Any]]:
        if not value:
            return None
        try:
            response = self.db.table(self.table_name)\
                .select("*")\
                .eq(column, value.strip().lower())\
                .limit(1)\
                .execute()

            return response.data[0] if response.data else None

        except Exception as e:
            logger.error(f"Erreur recherche {self.role.value} par {column}: {e}")
            raise

    def get_by_email(self, email: Optional[str]) -> Optional[Dict[str, Any]]:
        return self._get_by("email", email)

    def get_by_username(self, username: Optional[str]) -> Optional[Dict[str, Any]]:
        return self._get_by("username", username)

    def find_conflict(
        self,
        email: Optional[str] = None,
        username: Optional[str] = None,
        exclude_id: Optional[str] = None
    ) -> Optional[str]:
        """
        Chercher une collision email / username dans la table

        Args:
            email: Email candidat
            username: Username candidat
            exclude_id: Enregistrement à ignorer (mise à jour de soi-même)

        Returns:
            "email", "username" ou None
        """
        by_email = self.get_by_email(email)
        if by_email and str(by_email["id"]) != str(exclude_id):
            return "email"
        by_username = self.get_by_username(username)
        if by_username and str(by_username["id"]) != str(exclude_id):
            return "username"
        return None

    def get_page(
        self,
        page: int = 1,
        limit: int = 10,
        search: str = "",
        sort_by: str = "createdAt",
        descending: bool = False
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        Liste paginée avec recherche insensible à la casse

        Args:
            page: Numéro de page (à partir de 1)
            limit: Taille de page
            search: Sous-chaîne cherchée dans name/email/username/phone_number
            sort_by: Champ de tri (liste blanche, created_at par défaut)
            descending: Tri décroissant

        Returns:
            (enregistrements de la page, nombre total correspondant)
        """
        try:
            query = self.db.table(self.table_name).select("*", count="exact")

            # Les virgules et parenthèses délimitent les filtres PostgREST
            term = "".join(c for c in (search or "") if c not in ",()").strip()
            if term:
                query = query.or_(",".join(f"{field}.ilike.%{term}%" for field in SEARCH_FIELDS))

            column = SORTABLE_FIELDS.get(sort_by, "created_at")
            start = (page - 1) * limit

            response = query\
                .order(column, desc=descending)\
                .range(start, start + limit - 1)\
                .execute()

            return response.data, response.count or 0

        except Exception as e:
            logger.error(f"Erreur récupération liste {self.table_name}: {e}")
            raise

    def count(self) -> int:
        try:
            response = self.db.table(self.table_name)\
                .select("id", count="exact")\
                .execute()
            return response.count or 0

        except Exception as e:
            logger.error(f"Erreur comptage {self.table_name}: {e}")
            raise

    def get_recent(self, limit: int = 5) -> List[Dict[str, Any]]:
        try:
            response = self.db.table(self.table_name)\
                .select("*")\
                .order("created_at", desc=True)\
                .limit(limit)\
                .execute()
            return response.data

        except Exception as e:
            logger.error(f"Erreur récupération récents {self.table_name}: {e}")
            raise

    def update(self, user_id: str, user_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Mettre à jour une identité

        Le rôle n'est jamais modifiable; un mot de passe fourni est haché.
        """
        try:
            data = _normalize(user_data)
            data.pop("role", None)
            data.pop("id", None)
            if data.get("password"):
                data["password_hash"] = hash_password(data.pop("password"))
            else:
                data.pop("password", None)

            if not data:
                return self.get_by_id(user_id)

            response = self.db.table(self.table_name)\
                .update(data)\
                .eq("id", user_id)\
                .execute()

            if not response.data:
                raise Exception(f"{self.role.value} {user_id} introuvable")

            logger.info(f"{self.role.value} {user_id} mis à jour")
            return response.data[0]

        except Exception as e:
            logger.error(f"Erreur mise à jour {self.role.value} {user_id}: {e}")
            raise

    def delete(self, user_id: str) -> bool:
        try:
            self.db.table(self.table_name)\
                .delete()\
                .eq("id", user_id)\
                .execute()

            logger.info(f"{self.role.value} {user_id} supprimé")
            return True

        except Exception as e:
            logger.error(f"Erreur suppression {self.role.value} {user_id}: {e}")
            raise


def get_user_crud(db: Client, role: UserRole) -> UserCRUD:
    """Factory function pour créer une instance UserCRUD"""
    return UserCRUD(db, role)
