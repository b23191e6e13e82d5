# studypod/services/base_service.py
"""Base service with common CRUD operations."""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Type, Any, Dict, Optional, List, TypeVar, Generic

# Define generic type
T = TypeVar('T')

class BaseService(Generic[T]):
    # Raised by get_or_404; subclasses set their own not-found exception
    not_found_exception: Optional[Type[Exception]] = None

    def __init__(self, model: Type[T], db: AsyncSession):
        self.model = model
        self.db = db

    def _active(self, stmt, include_deleted: bool = False):
        if hasattr(self.model, 'is_deleted') and not include_deleted:
            stmt = stmt.where(self.model.is_deleted == False)
        return stmt

    async def get(self, id: Any, include_deleted: bool = False) -> Optional[T]:
        stmt = self._active(select(self.model).where(self.model.id == id), include_deleted)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_404(self, id: Any) -> T:
        obj = await self.get(id)
        if obj is None:
            if self.not_found_exception is not None:
                raise self.not_found_exception()
            raise LookupError(f"{self.model.__name__} {id} not found")
        return obj

    async def get_multi(
        self,
        skip: int = 0,
        limit: int = 100,
        order_by: Optional[str] = None,
        sort: str = "asc",
        include_deleted: bool = False,
        **filters
    ) -> List[T]:
        stmt = self._active(select(self.model), include_deleted)

        # Filters with a None value are treated as "not filtered"
        for key, value in filters.items():
            if hasattr(self.model, key) and value is not None:
                stmt = stmt.where(getattr(self.model, key) == value)

        if order_by and hasattr(self.model, order_by):
            order_field = getattr(self.model, order_by)
            stmt = stmt.order_by(order_field.desc() if sort.lower() == "desc" else order_field.asc())

        result = await self.db.execute(stmt.offset(skip).limit(limit))
        return list(result.scalars().all())

    async def create(self, obj_in: Dict) -> T:
        obj = self.model(**obj_in)
        self.db.add(obj)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def update(self, id: Any, obj_in: Dict) -> Optional[T]:
        obj = await self.get(id)
        if not obj:
            return None
        for key, value in obj_in.items():
            setattr(obj, key, value)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def soft_delete(self, id: Any) -> bool:
        obj = await self.get(id)
        if not obj:
            return False
        obj.is_deleted = True
        await self.db.commit()
        return True
