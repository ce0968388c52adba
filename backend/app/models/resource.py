"""
Modèle SQLAlchemy pour les ressources (vidéos, articles, podcasts, guides).
Publiées par les conseillers, lecture seule pour les étudiants.
"""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, func

from app.database import Base, new_object_id


class Resource(Base):
    __tablename__ = "resources"

    id = Column(String(24), primary_key=True, default=new_object_id)
    title = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False)  # video, article, podcast, guide
    language = Column(String(20), nullable=False)  # English, Hindi, Tamil, Malayalam
    tags = Column(JSON, default=list)  # anxiety, study, sleep
    link = Column(String(500), nullable=False)
    created_by = Column(String(24), ForeignKey("counselor_psychologists.id"), nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
