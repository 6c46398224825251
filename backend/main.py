"""
プロファイル検証 バックエンドAPI

FastAPIアプリケーションのエントリポイント
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.config import API_PREFIX, API_VERSION, CORS_ORIGINS
from backend.models.schemas import HealthResponse
from backend.routers import validate
from backend.services import validation_service


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Profile Validator API Server starting...")
    await validation_service.startup()
    yield
    await validation_service.shutdown()
    logger.info("Profile Validator API Server shutting down...")


app = FastAPI(
    title="Profile Validator API",
    description="リソースが宣言するプロファイルのSHACLシェイプで検証するAPI",
    version=API_VERSION,
    lifespan=lifespan,
)

# CORS設定
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ルーターを登録
app.include_router(validate.router, prefix=API_PREFIX)


@app.get("/")
async def root():
    """ルートエンドポイント"""
    return {
        "name": "Profile Validator API",
        "version": API_VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
    }


@app.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(status="ok", version=API_VERSION)
