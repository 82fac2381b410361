"""
Item routes.
"""
from fastapi import APIRouter, Depends, Response, status

from playground.application.services import ItemService
from playground.interfaces.rest.dependencies import get_item_service
from playground.interfaces.rest.schemas.request import ItemCreateRequest, ItemUpdateRequest
from playground.interfaces.rest.schemas.response import ItemEnvelope, ItemListResponse, ItemResponse

router = APIRouter(prefix="/items", tags=["items"])


@router.get("", response_model=ItemListResponse, response_model_exclude_none=True)
async def list_items(service: ItemService = Depends(get_item_service)) -> ItemListResponse:
    items = await service.list_items()
    return ItemListResponse(items=[ItemResponse.from_entity(item) for item in items])


@router.post(
    "",
    response_model=ItemEnvelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_item(
    request: ItemCreateRequest,
    service: ItemService = Depends(get_item_service),
) -> ItemEnvelope:
    item = await service.create_item(request.title, request.description)
    return ItemEnvelope(item=ItemResponse.from_entity(item))


@router.put("/{item_id}", response_model=ItemEnvelope, response_model_exclude_none=True)
async def update_item(
    item_id: str,
    request: ItemUpdateRequest,
    service: ItemService = Depends(get_item_service),
) -> ItemEnvelope:
    item = await service.update_item(item_id, title=request.title, description=request.description)
    return ItemEnvelope(item=ItemResponse.from_entity(item))


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(item_id: str, service: ItemService = Depends(get_item_service)) -> Response:
    await service.delete_item(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
