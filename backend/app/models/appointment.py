"""
Modèle SQLAlchemy pour les rendez-vous étudiant ↔ conseiller.
Les heures de créneau sont stockées au format HH:MM ; une heure de fin
inférieure ou égale à l'heure de début désigne le lendemain.
"""

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, String, func

from app.database import Base, new_object_id


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(String(24), primary_key=True, default=new_object_id)
    counselor_id = Column(String(24), ForeignKey("counselor_psychologists.id"), nullable=False)
    student_id = Column(String(24), ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    slot_date = Column(Date, nullable=False)
    slot_start_time = Column(String(5), nullable=False)
    slot_end_time = Column(String(5), nullable=False)
    status = Column(String(20), default="pending")  # pending, confirmed, rejected, completed
    reminder_sent = Column(Boolean, default=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
