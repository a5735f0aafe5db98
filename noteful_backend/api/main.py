import logging

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import configure_logging, settings
from .errors import NotefulError, StorageFailure
from .routers import auth, folders, notes, tags, users

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# FastAPI app config
app = FastAPI(
    title="Noteful API",
    description="Backend API for personal notes organised in folders and tags.",
    version="1.0.0",
    openapi_tags=[
        {"name": "Authentication", "description": "Login and token refresh"},
        {"name": "Users", "description": "User registration"},
        {"name": "Notes", "description": "Create, update, view, delete, search notes"},
        {"name": "Folders", "description": "Folders that group notes"},
        {"name": "Tags", "description": "Tags attached to notes"},
    ],
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(notes.router)
app.include_router(folders.router)
app.include_router(tags.router)


# Root Health Check
@app.get("/", summary="Health Check", tags=["General"])
def health_check():
    """Simple health check endpoint."""
    return {"message": "Healthy"}


#####################
# ERROR HANDLERS
#####################

@app.exception_handler(NotefulError)
def noteful_error_handler(request, exc: NotefulError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(SQLAlchemyError)
def storage_error_handler(request, exc: SQLAlchemyError):
    logger.exception("Storage failure on %s %s", request.method, request.url.path)
    failure = StorageFailure()
    return JSONResponse(status_code=failure.status_code, content=failure.to_dict())


@app.exception_handler(StarletteHTTPException)
def custom_http_exception_handler(request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
def validation_exception_handler(request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={"message": "Invalid request body", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
def unhandled_exception_handler(request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal Server Error"})
