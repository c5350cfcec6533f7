# server/core/categories.py

import logging
from datetime import datetime
from fastapi import UploadFile
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from core.assets import AssetStore
from core.errors import ConflictError, NotFoundError, ValidationError
from models.category import Category


logger = logging.getLogger(__name__)


class CategoryManager:
    """
    CRUD over categories, keeping the Asset Store in step with the rows.

    Replacing an image on update leaves the previous file on disk;
    only deleting the category removes its file.
    """

    def __init__(self, db: Session, assets: AssetStore):
        self.db = db
        self.assets = assets

    def serialize(self, category: Category) -> dict:
        return {
            "id": category.id,
            "name": category.name,
            "itemCount": category.item_count,
            "image": self.assets.resolve(category.image),
            "createdAt": category.created_at,
            "updatedAt": category.updated_at,
        }

    def _get_or_404(self, category_id: int) -> Category:
        category = self.db.query(Category).filter(Category.id == category_id).first()
        if category is None:
            raise NotFoundError("Category not found")
        return category

    def _check_item_count(self, item_count):
        if item_count is not None and item_count < 0:
            raise ValidationError("Item count cannot be negative")

    def _name_taken(self, name: str, exclude_id: int | None = None) -> bool:
        query = self.db.query(Category).filter(Category.name == name)
        if exclude_id is not None:
            query = query.filter(Category.id != exclude_id)
        return query.first() is not None

    def _commit(self):
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Category already exists", field="name")

    def list(self) -> list[dict]:
        categories = (
            self.db.query(Category)
            .order_by(Category.created_at.desc(), Category.id.desc())
            .all()
        )
        return [self.serialize(c) for c in categories]

    def get(self, category_id: int) -> dict:
        return self.serialize(self._get_or_404(category_id))

    def create(self, name: str | None, item_count: int | None = None, image: UploadFile | None = None) -> dict:
        if not name or not name.strip():
            raise ValidationError("Category name is required")
        self._check_item_count(item_count)

        if self._name_taken(name):
            raise ConflictError("Category already exists", field="name")

        image_filename = self.assets.save_upload(image) if image is not None else None

        category = Category(
            name=name,
            item_count=item_count or 0,
            image=image_filename,
        )
        self.db.add(category)
        try:
            self._commit()
        except ConflictError:
            self.assets.delete(image_filename)
            raise

        self.db.refresh(category)
        logger.info("Created category %r (id=%s)", category.name, category.id)
        return self.serialize(category)

    def update(
        self,
        category_id: int,
        name: str | None = None,
        item_count: int | None = None,
        image: UploadFile | None = None,
    ) -> dict:
        category = self._get_or_404(category_id)
        self._check_item_count(item_count)

        if name and not name.strip():
            raise ValidationError("Category name is required")

        if name and name != category.name and self._name_taken(name, exclude_id=category.id):
            raise ConflictError("Category already exists", field="name")

        image_filename = self.assets.save_upload(image) if image is not None else None

        category.name = name or category.name
        category.item_count = item_count if item_count is not None else category.item_count
        category.image = image_filename or category.image
        category.updated_at = datetime.now()
        try:
            self._commit()
        except ConflictError:
            self.assets.delete(image_filename)
            raise

        self.db.refresh(category)
        logger.info("Updated category %r (id=%s)", category.name, category.id)
        return self.serialize(category)

    def delete(self, category_id: int) -> dict:
        category = self._get_or_404(category_id)

        image_filename, name = category.image, category.name
        self.db.delete(category)
        self.db.commit()

        # Only after the row is gone; a missing file is fine
        self.assets.delete(image_filename)
        logger.info("Deleted category %r (id=%s)", name, category_id)
        return {"message": "Category deleted successfully"}
