"""Tableaux de bord admin et vendeur"""
from typing import List
from datetime import datetime

from .base import CamelModel
from .property import PropertyStatus
from .user import UserRole


class RecentProperty(CamelModel):
    id: str
    title: str
    price: str
    status: PropertyStatus
    created_at: datetime


class RecentUser(CamelModel):
    id: str
    name: str
    email: str
    role: UserRole
    created_at: datetime


class AdminDashboard(CamelModel):
    total_properties: int
    total_users: int
    recent_properties: List[RecentProperty]
    recent_users: List[RecentUser]


class RecentActivity(CamelModel):
    id: str
    title: str
    status: PropertyStatus
    created_at: datetime
    updated_at: datetime
    appointment_count: int


class SellerDashboardStats(CamelModel):
    total_properties: int
    approved_properties: int
    pending_properties: int
    rejected_properties: int
    total_appointments: int
    recent_activity: List[RecentActivity]
