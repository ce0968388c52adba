"""
Modèle SQLAlchemy pour la table students.
Un étudiant est identifié par un alias (pseudonyme), jamais par son nom réel.
"""

from sqlalchemy import Boolean, Column, DateTime, String, func

from app.database import Base, new_object_id


class Student(Base):
    __tablename__ = "students"

    id = Column(String(24), primary_key=True, default=new_object_id)
    alias_id = Column(String(100), unique=True, nullable=False)
    phone = Column(String(30), nullable=True)
    password_hash = Column(String(255), nullable=False)
    language = Column(String(10), default="en")
    status = Column(String(20), default="pending")  # active, pending, banned

    # Mot de passe temporaire (mot de passe oublié) : usage unique, expire vite
    is_temp_password = Column(Boolean, default=False)
    temp_password_hash = Column(String(255), nullable=True)
    temp_password_expires = Column(DateTime, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
