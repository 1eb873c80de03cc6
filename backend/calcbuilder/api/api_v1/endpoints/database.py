"""
Database health endpoints
"""

from fastapi import APIRouter, HTTPException, status
import logging

from calcbuilder.core.database_utils import DatabaseHealthCheck, check_database_connection

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/health")
async def database_health():
    """
    Database health check
    """
    health_status = DatabaseHealthCheck.check_connection()
    if health_status["status"] == "unhealthy":
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=health_status
        )
    return health_status

@router.get("/connection")
async def test_connection():
    """
    Test basic database connection
    """
    if check_database_connection():
        return {
            "status": "connected",
            "message": "Database connection successful"
        }
    logger.error("Connection test failed")
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail={"status": "disconnected", "message": "Database connection failed"}
    )
