from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/")
def root() -> dict[str, str]:
    return {"message": "Property Analyzer API is running"}


@router.get("/health")
@router.get("/v1/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
