"""
Modèle SQLAlchemy pour les avis laissés par les étudiants.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from app.database import Base, new_object_id


class Feedback(Base):
    __tablename__ = "feedbacks"

    id = Column(String(24), primary_key=True, default=new_object_id)
    student_id = Column(String(24), ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    rating = Column(Integer, nullable=False)  # 1 à 5
    type = Column(String(20), nullable=False)  # session, platform, content, SOS
    comment = Column(Text, nullable=True)
    counselor_id = Column(String(24), ForeignKey("counselor_psychologists.id"), nullable=True)
    appointment_id = Column(String(24), ForeignKey("appointments.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
