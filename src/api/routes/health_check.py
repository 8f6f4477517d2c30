from fastapi import APIRouter

from src.api.utils.envelope import Envelope, ok

router = APIRouter()


@router.get("/health", response_model=Envelope[dict])
async def health_check():
    return ok({"status": "ok"}, "Service is healthy")
