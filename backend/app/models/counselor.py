"""
Modèle SQLAlchemy pour les conseillers et psychologues.
Lecture seule côté étudiant (réservation, SOS, avis).
"""

from sqlalchemy import Boolean, Column, DateTime, String, func

from app.database import Base, new_object_id


class CounselorPsychologist(Base):
    __tablename__ = "counselor_psychologists"

    id = Column(String(24), primary_key=True, default=new_object_id)
    alias_id = Column(String(100), unique=True, nullable=False)
    full_name = Column(String(200), nullable=True)
    phone = Column(String(30), nullable=True)  # destinataire des appels SOS
    email = Column(String(255), unique=True, nullable=True)
    credentials = Column(String(255), nullable=False)
    specialization = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)  # counselor, psychologist
    status = Column(String(20), default="pending")  # active, pending, suspended
    approved_by_admin = Column(Boolean, default=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
