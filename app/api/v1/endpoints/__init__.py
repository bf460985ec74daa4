"""Endpoints API"""
from app.api.v1.endpoints import auth
from app.api.v1.endpoints import admin
from app.api.v1.endpoints import seller
from app.api.v1.endpoints import buyer
from app.api.v1.endpoints import properties

__all__ = ["auth", "admin", "seller", "buyer", "properties"]
