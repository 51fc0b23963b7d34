from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware
from contextlib import asynccontextmanager
from portal.config import settings
from portal.database import Base, engine
from portal.utils.logger import app_logger
from portal.utils.exceptions import AppException, create_error_response
from portal import models  # noqa: F401  (테이블 등록)
from portal.routers import (
    captive,
    install,
    admin
)

# 앱 시작 시 데이터베이스 초기화 (SQLite 테이블 생성)
@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    app_logger.info(f"Certificate portal running on http://localhost:{settings.PORT}")
    # 애플리케이션 실행
    yield

# FastAPI 앱 생성
app = FastAPI(
    title="Certificate Trust Portal",
    lifespan=lifespan
)

# 세션 설정 (서명된 쿠키, 30분 만료)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    max_age=settings.SESSION_MAX_AGE,
    same_site="lax",
    https_only=False,
)

# 애플리케이션 예외를 일관된 에러 포맷으로 응답
@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.status_code, exc.detail, exc.error_code),
        headers=exc.headers,
    )

# 라우터 등록
app.include_router(captive.router)
app.include_router(install.router)
app.include_router(admin.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("portal.main:app", host=settings.HOST, port=settings.PORT)
