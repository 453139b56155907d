"""Category CRUD service."""

import logging

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError, NotFoundError
from app.models.database import Category, File
from app.models.database.category import DEFAULT_CATEGORY_COLOR
from app.models.schemas import CategoryCreate, CategoryResponse, CategoryUpdate

logger = logging.getLogger(__name__)


class CategoryService:
    """Owner-scoped categories. Names are unique per owner."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_categories(self, owner_id: str) -> list[CategoryResponse]:
        query = (
            select(Category, func.count(File.id))
            .outerjoin(File, File.category_id == Category.id)
            .where(Category.owner_id == owner_id)
            .group_by(Category.id)
            .order_by(Category.name)
        )
        result = await self.db.execute(query)

        categories = []
        for category, file_count in result.all():
            response = CategoryResponse.model_validate(category)
            response.file_count = file_count
            categories.append(response)
        return categories

    async def get_category(self, category_id: int, owner_id: str) -> Category:
        query = select(Category).where(
            Category.id == category_id, Category.owner_id == owner_id
        )
        result = await self.db.execute(query)
        category = result.scalar_one_or_none()
        if not category:
            raise NotFoundError("Category not found")
        return category

    async def create_category(self, owner_id: str, data: CategoryCreate) -> Category:
        category = Category(
            owner_id=owner_id,
            name=data.name,
            color=data.color or DEFAULT_CATEGORY_COLOR,
        )
        self.db.add(category)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ConflictError("Category name already exists") from e

        await self.db.refresh(category)
        logger.info("Category created: %s by user %s", category.id, owner_id)
        return category

    async def update_category(
        self, category_id: int, owner_id: str, data: CategoryUpdate
    ) -> Category:
        category = await self.get_category(category_id, owner_id)
        if data.name is not None:
            category.name = data.name
        if data.color is not None:
            category.color = data.color

        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ConflictError("Category name already exists") from e

        await self.db.refresh(category)
        logger.info("Category updated: %s", category_id)
        return category

    async def delete_category(self, category_id: int, owner_id: str) -> None:
        """Delete a category; its files are kept and lose their category."""
        category = await self.get_category(category_id, owner_id)

        await self.db.execute(
            update(File)
            .where(File.category_id == category_id)
            .values(category_id=None)
            .execution_options(synchronize_session=False)
        )
        await self.db.delete(category)
        await self.db.commit()

        logger.info("Category deleted: %s", category_id)
