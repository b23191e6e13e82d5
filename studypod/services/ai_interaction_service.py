# studypod/services/ai_interaction_service.py
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from .base_service import BaseService
from ..models.ai_interaction import AiInteraction

class AiInteractionService(BaseService[AiInteraction]):
    def __init__(self, db: AsyncSession):
        super().__init__(AiInteraction, db)

    async def record(self, user_id: UUID, question: str, response: str, context: Optional[str] = None) -> AiInteraction:
        return await self.create({
            "user_id": user_id,
            "question": question,
            "response": response,
            "context": context[:200] if context else None,
        })

    async def get_user_history(self, user_id: UUID, limit: int = 20) -> List[AiInteraction]:
        return await self.get_multi(limit=limit, order_by="created_at", sort="desc", user_id=user_id)

    async def get_recent_contexts(self, user_id: UUID, limit: int = 5) -> List[str]:
        """Distinct recent interaction contexts, used as "recent topics" for study tips"""
        topics: List[str] = []
        for interaction in await self.get_user_history(user_id, limit=limit):
            if interaction.context and interaction.context not in topics:
                topics.append(interaction.context)
        return topics
