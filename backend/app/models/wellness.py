"""
Modèles SQLAlchemy pour le suivi bien-être : humeur et habitudes.
Chaque entrée possède son propre identifiant stable (jamais d'adressage par position).
"""

from sqlalchemy import JSON, Boolean, Column, Date, DateTime, Float, ForeignKey, Integer, String, Text, func

from app.database import Base, new_object_id


class MoodEntry(Base):
    __tablename__ = "mood_entries"

    id = Column(String(24), primary_key=True, default=new_object_id)
    student_id = Column(String(24), ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False)
    mood = Column(String(20), nullable=False)  # happy, sad, stressed, anxious, motivated
    note = Column(Text, nullable=True)
    tags = Column(JSON, default=list)
    created_at = Column(DateTime, server_default=func.now())


class HabitLog(Base):
    __tablename__ = "habit_logs"

    id = Column(String(24), primary_key=True, default=new_object_id)
    student_id = Column(String(24), ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False)
    exercise = Column(Boolean, default=False)
    hydration = Column(Integer, default=0)      # en ml
    screen_time = Column(Float, default=0)      # en heures
    sleep_hours = Column(Float, default=0)
    created_at = Column(DateTime, server_default=func.now())
