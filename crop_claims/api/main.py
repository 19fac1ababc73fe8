from fastapi import APIRouter

from crop_claims.api.routes import claims, health, policies, weather

api_router = APIRouter()

api_router.include_router(health.router, prefix="", tags=["Health"])
api_router.include_router(policies.router, prefix="/policies", tags=["Policies"])
api_router.include_router(claims.router, prefix="/claims", tags=["Claims"])
api_router.include_router(weather.router, prefix="/weather", tags=["Weather"])
