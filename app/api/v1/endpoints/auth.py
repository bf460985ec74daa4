"""
Routes publiques d'inscription et de connexion
"""
from fastapi import APIRouter, Depends, status
from supabase import Client
import logging

from app.core.errors import APIError, ServerError
from app.db import get_supabase
from app.models import AuthResponse, RegisterRequest, SigninRequest
from app.services import accounts

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    db: Client = Depends(get_supabase)
):
    """
    Inscription d'un acheteur, vendeur ou admin

    - **name**: 2 à 50 caractères
    - **username**: 3 à 30 caractères, unique dans le store du rôle
    - **email**: unique dans le store du rôle
    - **password**: 6 caractères minimum
    - **phoneNumber**: obligatoire pour buyer / seller
    - **role**: buyer, seller ou admin
    """
    try:
        return accounts.register(db, payload)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur inscription: {e}")
        raise ServerError("Server error", error=str(e))


@router.post("/signin", response_model=AuthResponse)
def signin(
    payload: SigninRequest,
    db: Client = Depends(get_supabase)
):
    """Connexion par email, mot de passe et rôle"""
    try:
        return accounts.signin(db, payload)
    except APIError:
        raise
    except Exception as e:
        logger.error(f"Erreur connexion: {e}")
        raise ServerError("Server error", error=str(e))
