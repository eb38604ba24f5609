"""TailorHub HTTP API: routers and the error responses shared by all of them."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from tailoring.api.carts import router as cart_router
from tailoring.api.catalogue import router as catalogue_router
from tailoring.api.dashboard import router as dashboard_router
from tailoring.api.orders import router as order_router
from tailoring.api.users import router as user_router
from tailoring.checkout.wizard import AuthenticationRequired
from tailoring.media.port import ImageUploadError
from tailoring.order.placement import DuplicateCheckout
from tailoring.people.permissions import PermissionDenied

ROUTERS = (catalogue_router, user_router, cart_router, order_router, dashboard_router)


async def _authentication_required(request: Request, exc: AuthenticationRequired) -> JSONResponse:
    return JSONResponse(
        status_code=401,
        content={"detail": str(exc), "login_path": exc.login_path, "return_path": exc.return_path},
    )


async def _permission_denied(request: Request, exc: PermissionDenied) -> JSONResponse:
    return JSONResponse(status_code=403, content={"detail": str(exc)})


async def _duplicate_checkout(request: Request, exc: DuplicateCheckout) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc), "order_id": exc.order_id})


async def _image_upload_failed(request: Request, exc: ImageUploadError) -> JSONResponse:
    return JSONResponse(status_code=502, content={"detail": f"Image upload failed: {exc}"})


def include_routers(app: FastAPI) -> None:
    for router in ROUTERS:
        app.include_router(router)


def register_error_handlers(app: FastAPI) -> None:
    """Protean's domain exception mapping plus the TailorHub-specific ones."""
    register_exception_handlers(app)
    app.add_exception_handler(AuthenticationRequired, _authentication_required)
    app.add_exception_handler(PermissionDenied, _permission_denied)
    app.add_exception_handler(DuplicateCheckout, _duplicate_checkout)
    app.add_exception_handler(ImageUploadError, _image_upload_failed)


__all__ = ["ROUTERS", "include_routers", "register_error_handlers"]
