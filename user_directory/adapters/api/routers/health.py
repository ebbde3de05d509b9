# user_directory/adapters/api/routers/health.py
from typing import Dict

import structlog
from fastapi import APIRouter, Depends, Response, status

from user_directory.adapters.api.dependencies import get_user_repository
from user_directory.core.ports.user_repository import IUserRepository

logger = structlog.get_logger()

router = APIRouter(prefix="/health", tags=["system"])


@router.get("/live", status_code=status.HTTP_200_OK)
def liveness_check() -> Dict[str, str]:
    """
    Liveness check.
    Returns 200 OK if the process is serving requests.
    """
    return {"status": "ok"}


@router.get("/ready", status_code=status.HTTP_200_OK)
def readiness_check(
    response: Response,
    repo: IUserRepository = Depends(get_user_repository),
) -> Dict[str, str]:
    """
    Readiness check.
    Checks the relational store; returns 503 Service Unavailable when it is down.
    """
    health_status = {"storage": "down"}

    try:
        if repo.health_check():
            health_status["storage"] = "up"
    except Exception as e:
        logger.error("health_check_failed", component="storage", error=str(e))

    if health_status["storage"] != "up":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("readiness_check_failed", status=health_status)

    return health_status
