# backend/app/api/v1/router.py
from fastapi import APIRouter
from .endpoints import health, datasets

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(datasets.router, prefix="/datasets", tags=["datasets"])
