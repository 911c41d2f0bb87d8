from fastapi import APIRouter

router = APIRouter(prefix="", tags=["system"])


@router.get("/health")
async def health_check() -> dict:
    """Liveness probe."""
    return {"status": "ok"}
