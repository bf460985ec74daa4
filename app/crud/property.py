"""
Opérations CRUD pour Properties
"""
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone
from supabase import Client
from app.crud.user import is_valid_id
from app.models import Property, CreatorModel, PropertyStatus
import logging

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class PropertyCRUD:
    def __init__(self, db: Client):
        self.db = db
        self.table = "properties"

    def create(
        self,
        property_data: Dict[str, Any],
        created_by: str,
        created_by_model: CreatorModel,
        status: PropertyStatus
    ) -> Property:
        """Créer une nouvelle annonce"""
        try:
            data = dict(property_data)
            data["created_by"] = str(created_by)
            data["created_by_model"] = CreatorModel(created_by_model).value
            data["status"] = PropertyStatus(status).value
            data["interested"] = []

            result = self.db.table(self.table).insert(data).execute()

            if result.data:
                logger.info(f"Propriété créée: {result.data[0]['id']}")
                return Property(**result.data[0])
            else:
                raise Exception("Erreur lors de la création")

        except Exception as e:
            logger.error(f"Erreur création propriété: {e}")
            raise

    def get_by_id(self, property_id: str, status: Optional[PropertyStatus] = None) -> Optional[Property]:
        """Récupérer une annonce par ID (optionnellement filtrée par statut)"""
        if not is_valid_id(property_id):
            return None
        try:
            query = self.db.table(self.table)\
                .select("*")\
                .eq("id", property_id)
            if status:
                query = query.eq("status", PropertyStatus(status).value)

            result = query.execute()

            if result.data and len(result.data) > 0:
                return Property(**result.data[0])
            return None

        except Exception as e:
            logger.error(f"Erreur récupération propriété {property_id}: {e}")
            raise

    def get_owned(self, property_id: str, seller_id: str) -> Optional[Property]:
        """Annonce appartenant au vendeur, None sinon"""
        if not is_valid_id(property_id):
            return None
        try:
            result = self.db.table(self.table)\
                .select("*")\
                .eq("id", property_id)\
                .eq("created_by", str(seller_id))\
                .eq("created_by_model", CreatorModel.seller.value)\
                .execute()

            if result.data:
                return Property(**result.data[0])
            return None

        except Exception as e:
            logger.error(f"Erreur récupération propriété {property_id} du vendeur {seller_id}: {e}")
            raise

    def get_all(
        self,
        status: Optional[PropertyStatus] = None,
        created_by: Optional[str] = None,
        created_by_model: Optional[CreatorModel] = None,
        limit: Optional[int] = None
    ) -> List[Property]:
        """Liste des annonces, les plus récentes d'abord"""
        try:
            query = self.db.table(self.table).select("*")

            if status:
                query = query.eq("status", PropertyStatus(status).value)
            if created_by:
                query = query.eq("created_by", str(created_by))
            if created_by_model:
                query = query.eq("created_by_model", CreatorModel(created_by_model).value)

            query = query.order("created_at", desc=True)
            if limit:
                query = query.limit(limit)

            result = query.execute()
            return [Property(**item) for item in result.data]

        except Exception as e:
            logger.error(f"Erreur récupération propriétés: {e}")
            raise

    def get_by_ids(self, property_ids: List[str]) -> List[Property]:
        ids = [i for i in set(property_ids) if is_valid_id(i)]
        if not ids:
            return []
        try:
            result = self.db.table(self.table)\
                .select("*")\
                .in_("id", ids)\
                .execute()
            return [Property(**item) for item in result.data]

        except Exception as e:
            logger.error(f"Erreur récupération propriétés {ids}: {e}")
            raise

    def count(self) -> int:
        try:
            result = self.db.table(self.table)\
                .select("id", count="exact")\
                .execute()
            return result.count or 0

        except Exception as e:
            logger.error(f"Erreur comptage propriétés: {e}")
            raise

    def exists_for_creator(self, creator_id: str, created_by_model: CreatorModel) -> bool:
        """Au moins une annonce référence ce créateur"""
        try:
            result = self.db.table(self.table)\
                .select("id")\
                .eq("created_by", str(creator_id))\
                .eq("created_by_model", CreatorModel(created_by_model).value)\
                .limit(1)\
                .execute()
            return bool(result.data)

        except Exception as e:
            logger.error(f"Erreur vérification propriétés du créateur {creator_id}: {e}")
            raise

    def update(self, property_id: str, property_data: Dict[str, Any]) -> Optional[Property]:
        """Mettre à jour une annonce"""
        try:
            data = dict(property_data)
            for key in ("id", "created_by", "created_by_model", "interested", "created_at"):
                data.pop(key, None)

            if not data:
                raise ValueError("Aucune donnée à mettre à jour")

            data["updated_at"] = _now()

            result = self.db.table(self.table)\
                .update(data)\
                .eq("id", property_id)\
                .execute()

            if result.data:
                logger.info(f"Propriété mise à jour: {property_id}")
                return Property(**result.data[0])
            return None

        except Exception as e:
            logger.error(f"Erreur mise à jour propriété {property_id}: {e}")
            raise

    def delete(self, property_id: str) -> Optional[Property]:
        """Supprimer une annonce; renvoie l'enregistrement supprimé"""
        try:
            result = self.db.table(self.table)\
                .delete()\
                .eq("id", property_id)\
                .execute()

            logger.info(f"Propriété supprimée: {property_id}")
            if result.data:
                return Property(**result.data[0])
            return None

        except Exception as e:
            logger.error(f"Erreur suppression propriété {property_id}: {e}")
            raise

    def add_interest(self, property_id: str, buyer_id: str) -> None:
        """Ajout idempotent (fonction SQL add_property_interest)"""
        try:
            self.db.rpc(
                "add_property_interest",
                {"p_property_id": property_id, "p_buyer_id": str(buyer_id)}
            ).execute()
            logger.info(f"Acheteur {buyer_id} intéressé par {property_id}")

        except Exception as e:
            logger.error(f"Erreur ajout intérêt {property_id}: {e}")
            raise

    def remove_interest(self, property_id: str, buyer_id: str) -> None:
        """Retrait idempotent (fonction SQL remove_property_interest)"""
        try:
            self.db.rpc(
                "remove_property_interest",
                {"p_property_id": property_id, "p_buyer_id": str(buyer_id)}
            ).execute()
            logger.info(f"Acheteur {buyer_id} n'est plus intéressé par {property_id}")

        except Exception as e:
            logger.error(f"Erreur retrait intérêt {property_id}: {e}")
            raise


def get_property_crud(db: Client) -> PropertyCRUD:
    return PropertyCRUD(db)
