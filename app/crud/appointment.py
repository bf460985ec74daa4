# app/crud/appointment.py
"""
Opérations CRUD pour les rendez-vous de visite
"""

from typing import Optional, List, Dict, Any
from supabase import Client
import logging

from app.crud.property import PropertyCRUD
from app.crud.user import UserCRUD, is_valid_id
from app.models import (
    Appointment, AppointmentStatus, PropertySummary, UserSummary, UserRole
)

logger = logging.getLogger(__name__)


class AppointmentCRUD:
    """Classe pour gérer les opérations CRUD sur les rendez-vous"""

    def __init__(self, db: Client):
        self.db = db
        self.table_name = "appointments"

    def create(self, appointment_data: Dict[str, Any]) -> Appointment:
        """
        Créer un rendez-vous (toujours au statut pending)

        Args:
            appointment_data: date, place_to_visit, message,
                seller_id, buyer_id, property_id

        Returns:
            Rendez-vous créé
        """
        try:
            data = dict(appointment_data)
            if hasattr(data.get("date"), "isoformat"):
                data["date"] = data["date"].isoformat()
            data["status"] = AppointmentStatus.pending.value

            response = self.db.table(self.table_name).insert(data).execute()

            if not response.data:
                raise Exception("Aucune donnée retournée après insertion")

            logger.info(f"Rendez-vous créé: {response.data[0]['id']}")
            return Appointment(**response.data[0])

        except Exception as e:
            logger.error(f"Erreur création rendez-vous: {e}")
            raise

    def get_by_id(
        self,
        appointment_id: str,
        buyer_id: Optional[str] = None,
        seller_id: Optional[str] = None,
        status: Optional[AppointmentStatus] = None
    ) -> Optional[Appointment]:
        """
        Récupérer un rendez-vous, restreint à un acheteur / vendeur

        Returns:
            Rendez-vous trouvé ou None (absent ou hors du périmètre de l'appelant)
        """
        if not is_valid_id(appointment_id):
            return None
        try:
            query = self.db.table(self.table_name)\
                .select("*")\
                .eq("id", appointment_id)
            if buyer_id:
                query = query.eq("buyer_id", str(buyer_id))
            if seller_id:
                query = query.eq("seller_id", str(seller_id))
            if status:
                query = query.eq("status", AppointmentStatus(status).value)

            response = query.execute()

            if response.data:
                return Appointment(**response.data[0])
            return None

        except Exception as e:
            logger.error(f"Erreur récupération rendez-vous {appointment_id}: {e}")
            raise

    def get_all(
        self,
        buyer_id: Optional[str] = None,
        seller_id: Optional[str] = None,
        property_ids: Optional[List[str]] = None
    ) -> List[Appointment]:
        """Rendez-vous filtrés, les plus récents d'abord"""
        if property_ids is not None and not property_ids:
            return []
        try:
            query = self.db.table(self.table_name).select("*")

            if buyer_id:
                query = query.eq("buyer_id", str(buyer_id))
            if seller_id:
                query = query.eq("seller_id", str(seller_id))
            if property_ids is not None:
                query = query.in_("property_id", [str(i) for i in property_ids])

            response = query.order("created_at", desc=True).execute()

            return [Appointment(**item) for item in response.data]

        except Exception as e:
            logger.error(f"Erreur récupération liste rendez-vous: {e}")
            raise

    def update_status(self, appointment_id: str, new_status: AppointmentStatus) -> Appointment:
        """Changer le statut (toute transition entre les quatre statuts est permise)"""
        try:
            response = self.db.table(self.table_name)\
                .update({"status": AppointmentStatus(new_status).value})\
                .eq("id", appointment_id)\
                .execute()

            if not response.data:
                raise Exception(f"Rendez-vous {appointment_id} introuvable")

            logger.info(f"Statut du rendez-vous {appointment_id} mis à jour: {new_status}")
            return Appointment(**response.data[0])

        except Exception as e:
            logger.error(f"Erreur mise à jour statut rendez-vous {appointment_id}: {e}")
            raise

    def delete(self, appointment_id: str) -> bool:
        try:
            self.db.table(self.table_name)\
                .delete()\
                .eq("id", appointment_id)\
                .execute()

            logger.info(f"Rendez-vous {appointment_id} supprimé")
            return True

        except Exception as e:
            logger.error(f"Erreur suppression rendez-vous {appointment_id}: {e}")
            raise

    def populate(
        self,
        appointments: List[Appointment],
        seller: bool = False,
        buyer: bool = False,
        property: bool = False
    ) -> List[Appointment]:
        """
        Résoudre les références vers vendeur, acheteur et annonce

        Les références sont faibles: une référence qui ne résout plus
        laisse le champ correspondant à None.
        """
        if not appointments:
            return appointments

        sellers = {}
        buyers = {}
        properties = {}

        if seller:
            rows = UserCRUD(self.db, UserRole.SELLER).get_by_ids([a.seller_id for a in appointments])
            sellers = {str(r["id"]): UserSummary(**r) for r in rows}
        if buyer:
            rows = UserCRUD(self.db, UserRole.BUYER).get_by_ids([a.buyer_id for a in appointments])
            buyers = {str(r["id"]): UserSummary(**r) for r in rows}
        if property:
            rows = PropertyCRUD(self.db).get_by_ids([a.property_id for a in appointments])
            properties = {p.id: PropertySummary(**p.model_dump()) for p in rows}

        return [
            a.model_copy(update={
                "seller": sellers.get(a.seller_id) if seller else a.seller,
                "buyer": buyers.get(a.buyer_id) if buyer else a.buyer,
                "property": properties.get(a.property_id) if property else a.property,
            })
            for a in appointments
        ]


def get_appointment_crud(db: Client) -> AppointmentCRUD:
    """Factory function pour créer une instance AppointmentCRUD"""
    return AppointmentCRUD(db)
