"""Visit counter endpoint.

Served on every path. The HTTP method picks the operation and the JSON body
carries the outcome; the status code is always 200.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..counter.service import (
    INVALID_ACTION,
    METHOD_NOT_ALLOWED,
    VisitCounterService,
    VisitReport,
)
from ..counter.store import VisitStore
from ..database.connection import DatabaseManager, get_db_manager

logger = logging.getLogger(__name__)

router = APIRouter()

INCREMENT_ACTION = "increment"

# OPTIONS is answered by ResponseHeadersMiddleware before routing
HANDLED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"]


def get_visit_service(
    request: Request,
    db: DatabaseManager = Depends(get_db_manager),
) -> VisitCounterService:
    return VisitCounterService(VisitStore(db), request.app.state.clock)


async def _read_action(request: Request):
    """Return the ``action`` field of a JSON object body, or None."""
    try:
        payload = await request.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    return payload.get("action")


@router.api_route("/{path:path}", methods=HANDLED_METHODS)
async def visits(
    request: Request,
    service: VisitCounterService = Depends(get_visit_service),
):
    """Record and/or report visits depending on the method."""
    try:
        if request.method == "POST":
            if await _read_action(request) == INCREMENT_ACTION:
                report = await service.record_visit()
            else:
                report = service.reject(INVALID_ACTION)
        elif request.method == "GET":
            report = await service.report()
        else:
            report = service.reject(METHOD_NOT_ALLOWED)
    except Exception:
        logger.exception("Failed to serve visit request")
        report = VisitReport.server_error()

    return JSONResponse(report.to_dict())
