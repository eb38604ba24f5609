"""FastAPI routes for the catalogue: designs, fabrics, categories and images.

Reads are public; every write requires an admin.
"""

from fastapi import APIRouter, Depends, HTTPException
from protean.utils.globals import current_domain

from tailoring.api.auth import Actor, require_admin
from tailoring.api.schemas import (
    CatalogItemRequest,
    CatalogItemResponse,
    CategoryIdResponse,
    CategoryRequest,
    CategoryResponse,
    ImageUploadRequest,
    ImageUploadResponse,
    ItemIdResponse,
    StatusResponse,
    UpdateCatalogItemRequest,
)
from tailoring.catalogue.category import Category
from tailoring.catalogue.item import CatalogItem, ItemKind
from tailoring.catalogue.management import (
    AddCatalogItem,
    AddCategory,
    RemoveCatalogItem,
    RemoveCategory,
    UpdateCatalogItem,
)
from tailoring.media import get_cdn, upload_profile
from tailoring.media.port import DESIGN_FOLDER, FABRIC_FOLDER, ImageFile, validate_image

router = APIRouter(prefix="/catalogue", tags=["catalogue"])

_COLLECTIONS = {"designs": ItemKind.DESIGN, "fabrics": ItemKind.FABRIC}
_FOLDERS = {ItemKind.DESIGN: DESIGN_FOLDER, ItemKind.FABRIC: FABRIC_FOLDER}


def _kind_of_collection(collection: str) -> ItemKind:
    if collection not in _COLLECTIONS:
        raise HTTPException(status_code=404, detail=f"Unknown catalogue collection '{collection}'")
    return _COLLECTIONS[collection]


def _kind(value: str) -> ItemKind:
    try:
        return ItemKind(value)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown catalogue kind '{value}'")


def _item_response(item: CatalogItem) -> CatalogItemResponse:
    return CatalogItemResponse(
        item_id=str(item.id),
        kind=item.kind,
        name=item.name,
        category=item.category,
        price=item.price,
        image_url=item.image_url,
        description=item.description,
        created_at=item.created_at,
    )


def _load_item(kind: ItemKind, item_id: str) -> CatalogItem:
    item = current_domain.repository_for(CatalogItem).get(item_id)
    if item.kind != kind.value:
        raise HTTPException(status_code=404, detail=f"No {kind.value} with id {item_id}")
    return item


# ---------------------------------------------------------------------------
# Categories and images (declared before the generic collection routes)
# ---------------------------------------------------------------------------
@router.get("/categories/{kind}", response_model=list[CategoryResponse])
async def list_categories(kind: str) -> list[CategoryResponse]:
    categories = current_domain.repository_for(Category).find_by_kind(_kind(kind).value)
    return [CategoryResponse(category_id=str(c.id), kind=c.kind, name=c.name) for c in categories]


@router.post("/categories/{kind}", status_code=201, response_model=CategoryIdResponse)
async def add_category(kind: str, body: CategoryRequest, admin: Actor = Depends(require_admin)) -> CategoryIdResponse:
    command = AddCategory(kind=_kind(kind).value, name=body.name)
    result = current_domain.process(command, asynchronous=False)
    return CategoryIdResponse(category_id=result)


@router.delete("/categories/{kind}/{category_id}", response_model=StatusResponse)
async def remove_category(kind: str, category_id: str, admin: Actor = Depends(require_admin)) -> StatusResponse:
    kind = _kind(kind)
    category = current_domain.repository_for(Category).get(category_id)
    if category.kind != kind.value:
        raise HTTPException(status_code=404, detail=f"No {kind.value} category with id {category_id}")
    current_domain.process(RemoveCategory(category_id=category_id), asynchronous=False)
    return StatusResponse(status="removed")


@router.post("/images", status_code=201, response_model=ImageUploadResponse)
def upload_image(
    body: ImageUploadRequest, kind: str = "design", admin: Actor = Depends(require_admin)
) -> ImageUploadResponse:
    """Validate an image and push it to the CDN folder for its kind.

    The CDN call blocks, so this route is a plain function and runs in the threadpool.
    """
    image = ImageFile(filename=body.filename, content_type=body.content_type, content=body.data)
    validate_image(image)
    result = get_cdn().upload(image, folder=_FOLDERS[_kind(kind)], upload_profile=upload_profile())
    return ImageUploadResponse(url=result.url, public_id=result.public_id)


# ---------------------------------------------------------------------------
# Designs and fabrics
# ---------------------------------------------------------------------------
@router.get("/{collection}", response_model=list[CatalogItemResponse])
async def list_items(collection: str, category: str | None = None) -> list[CatalogItemResponse]:
    kind = _kind_of_collection(collection)
    items = current_domain.repository_for(CatalogItem).find_by_kind(kind.value, category=category)
    return [_item_response(item) for item in items]


@router.get("/{collection}/{item_id}", response_model=CatalogItemResponse)
async def get_item(collection: str, item_id: str) -> CatalogItemResponse:
    return _item_response(_load_item(_kind_of_collection(collection), item_id))


@router.post("/{collection}", status_code=201, response_model=ItemIdResponse)
async def add_item(
    collection: str, body: CatalogItemRequest, admin: Actor = Depends(require_admin)
) -> ItemIdResponse:
    command = AddCatalogItem(
        kind=_kind_of_collection(collection).value,
        name=body.name,
        category=body.category,
        price=body.price,
        description=body.description,
        image_url=body.image_url,
    )
    result = current_domain.process(command, asynchronous=False)
    return ItemIdResponse(item_id=result)


@router.put("/{collection}/{item_id}", response_model=StatusResponse)
async def update_item(
    collection: str, item_id: str, body: UpdateCatalogItemRequest, admin: Actor = Depends(require_admin)
) -> StatusResponse:
    _load_item(_kind_of_collection(collection), item_id)
    command = UpdateCatalogItem(item_id=item_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="updated")


@router.delete("/{collection}/{item_id}", response_model=StatusResponse)
async def remove_item(collection: str, item_id: str, admin: Actor = Depends(require_admin)) -> StatusResponse:
    _load_item(_kind_of_collection(collection), item_id)
    current_domain.process(RemoveCatalogItem(item_id=item_id), asynchronous=False)
    return StatusResponse(status="removed")
