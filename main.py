from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from framework.config import settings
from framework.database.manager import DatabaseManager
from framework.response import ResponseModel
from framework.middleware.logging_md import LoggingMiddleware
from framework.logging.logger import LogConfig
from framework.exceptions.handler import BusinessException, global_exception_handler
from framework.security import get_token_codec
from apps.auth.api.router import router as auth_router
from apps.users.api.router import router as users_router
from apps.routes.api.router import router as routes_router
from apps.health.api.router import router as health_router

# Initialize logging configuration
LogConfig.setup_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Fail fast: signing secret is a startup precondition
    get_token_codec()
    logger.info(f"{settings.APP_NAME} starting ({settings.APP_ENV})")
    db = DatabaseManager.get_instance().mysql
    try:
        await db.connect()
    except (SQLAlchemyError, OSError) as e:
        # Not fatal; /health reports the database as disconnected until it is reachable
        logger.warning(f"Database not reachable at startup: {e}")
    yield
    await db.disconnect()

app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Register global exception handlers
app.add_exception_handler(BusinessException, global_exception_handler)
app.add_exception_handler(RequestValidationError, global_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

app.add_middleware(LoggingMiddleware)

@app.get("/", tags=["Health"])
async def root():
    return ResponseModel.success(data={"message": f"Welcome to {settings.APP_NAME}"})

# Mount routers (prefix from config for easy override in private projects)
app.include_router(health_router, tags=["Health"])

app.include_router(
    auth_router,
    prefix=settings.API_AUTH_PREFIX,
    tags=["Auth"]
)

app.include_router(
    users_router,
    prefix=settings.API_USERS_PREFIX,
    tags=["Users"]
)

app.include_router(
    routes_router,
    prefix=settings.API_ROUTES_PREFIX,
    tags=["Routes"]
)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
