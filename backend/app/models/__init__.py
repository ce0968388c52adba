# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SQLAlchemy tente de résoudre les clés étrangères inter-modèles.

from app.models.student import Student  # noqa: F401
from app.models.counselor import CounselorPsychologist  # noqa: F401
from app.models.appointment import Appointment  # noqa: F401
from app.models.feedback import Feedback  # noqa: F401
from app.models.resource import Resource  # noqa: F401
from app.models.wellness import HabitLog, MoodEntry  # noqa: F401
from app.models.sos import SOSAlert, SOSLog  # noqa: F401
