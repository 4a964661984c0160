"""
HTTP surface for the benefits BPP.

Protocol actions (/search, /select, /init) and listing reads (/benefits/...)
routed onto BenefitsService. Client errors return their message; server
errors return a generic message only.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, Header, Request
from fastapi.responses import JSONResponse

from src.core.config import Settings
from src.core.errors import BenefitsError
from src.services.benefits_service import BenefitsService


logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    service: Optional[BenefitsService] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Validated settings; read from the environment if omitted
        service: Pre-built service (tests); built from settings if omitted

    Raises:
        MissingConfiguration: If required settings are missing
    """
    if service is None:
        settings = (settings or Settings.from_env()).validate()
        service = BenefitsService.from_settings(settings)

    app = FastAPI(title="Benefits BPP")
    app.state.service = service

    @app.exception_handler(BenefitsError)
    async def handle_benefits_error(request: Request, exc: BenefitsError):
        if exc.status_code >= 500:
            logger.error(f"{request.url.path} failed: {exc!r}")
        else:
            logger.warning(f"{request.url.path} rejected: {exc}")
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})

    @app.post("/search")
    async def search(body: Dict[str, Any] = Body(...)):
        return await service.search(body)

    @app.post("/select")
    async def select(body: Dict[str, Any] = Body(...)):
        return await service.select(body)

    @app.post("/init")
    async def init(body: Dict[str, Any] = Body(...)):
        return await service.init(body)

    @app.post("/benefits/getBenefits")
    async def get_benefits(
        body: Optional[Dict[str, Any]] = Body(None),
        authorization: Optional[str] = Header(None),
    ):
        return await service.get_benefits(body, authorization)

    @app.get("/benefits/getById/{benefit_id}")
    async def get_benefit_by_id(benefit_id: str):
        return await service.get_benefit_by_id(benefit_id)

    return app
