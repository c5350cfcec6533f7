# server/api/categories.py

from datetime import datetime
from pydantic import BaseModel
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from sqlalchemy.orm import Session
from api.auth import get_current_user
from core.categories import CategoryManager
from database import get_db


# -------------------------------
# Router & Schemas
# -------------------------------

# Every category route requires a valid bearer token
router = APIRouter(
    prefix="/api/categories",
    tags=["categories"],
    dependencies=[Depends(get_current_user)],
)


class CategoryOut(BaseModel):
    id: int
    name: str
    itemCount: int
    image: str | None
    createdAt: datetime
    updatedAt: datetime


class MessageOut(BaseModel):
    message: str


def get_category_manager(request: Request, db: Session = Depends(get_db)) -> CategoryManager:
    return CategoryManager(db, request.app.state.assets)


def _present(upload: UploadFile | None) -> UploadFile | None:
    # Browsers send an empty part when no file was chosen
    if upload is None or not upload.filename:
        return None
    return upload


# -------------------------------
# Category Endpoints
# -------------------------------

@router.get("", response_model=list[CategoryOut])
def list_categories(manager: CategoryManager = Depends(get_category_manager)):
    """
    Returns all categories, newest first.
    """
    return manager.list()


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: int, manager: CategoryManager = Depends(get_category_manager)):
    return manager.get(category_id)


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(
    name: str | None = Form(None),
    item_count: int | None = Form(None, alias="itemCount"),
    image: UploadFile | None = File(None),
    manager: CategoryManager = Depends(get_category_manager),
):
    """
    Creates a category from a multipart form.
    The optional `image` part must be an image no larger than the upload limit.
    """
    return manager.create(name, item_count, _present(image))


@router.put("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: int,
    name: str | None = Form(None),
    item_count: int | None = Form(None, alias="itemCount"),
    image: UploadFile | None = File(None),
    manager: CategoryManager = Depends(get_category_manager),
):
    """
    Partial update: omitted fields keep their current values.
    A new image replaces the reference; the old file stays on disk.
    """
    return manager.update(category_id, name, item_count, _present(image))


@router.delete("/{category_id}", response_model=MessageOut)
def delete_category(category_id: int, manager: CategoryManager = Depends(get_category_manager)):
    return manager.delete(category_id)
