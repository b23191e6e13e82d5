from .gemini_client import GeminiClient
from .study_ai_service import StudyAIService, get_ai_service
from .recommendation_service import RecommendationService

__all__ = ["GeminiClient", "StudyAIService", "get_ai_service", "RecommendationService"]
