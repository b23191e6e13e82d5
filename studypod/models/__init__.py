# studypod/models/__init__.py
"""Import all models here, if needed for Alembic migration."""
from .base import Base

from .user import User
from .study_pod import StudyPod, PodMembership
from .study_session import StudySession, SessionAttendance
from .badge import Badge, UserBadge
from .ai_interaction import AiInteraction
from .pod_file import PodFile
from .chat import ChatMessage, MessageType
from .video_call import VideoCallSession, VideoCallParticipant

# This ensures all models are loaded when importing models
