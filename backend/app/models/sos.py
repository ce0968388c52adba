"""
Modèles SQLAlchemy pour les alertes SOS.

Un SOSLog correspond à un déclenchement ; chaque conseiller alerté a sa ligne
SOSAlert qui porte le résultat de la livraison (appel ou SMS).
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from app.database import Base, new_object_id


class SOSLog(Base):
    __tablename__ = "sos_logs"

    id = Column(String(24), primary_key=True, default=new_object_id)
    student_id = Column(String(24), ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    method = Column(String(10), nullable=False)  # call, sms, app
    triggered_at = Column(DateTime, server_default=func.now())
    created_at = Column(DateTime, server_default=func.now())


class SOSAlert(Base):
    """Association alerte ↔ conseiller alerté, avec le statut de livraison."""
    __tablename__ = "sos_alerts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sos_log_id = Column(String(24), ForeignKey("sos_logs.id", ondelete="CASCADE"), nullable=False)
    counselor_id = Column(String(24), ForeignKey("counselor_psychologists.id"), nullable=False)
    delivery_status = Column(String(20), default="pending")  # initiated, failed, not_required
    delivery_error = Column(Text, nullable=True)
    provider_sid = Column(String(64), nullable=True)
    attempts = Column(Integer, default=0)
    created_at = Column(DateTime, server_default=func.now())
