"""
Jira AI Assistant - FastAPI Backend
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jira_assistant import __version__
from jira_assistant.config import get_settings
from jira_assistant.exceptions import MissingParametersError
from jira_assistant.middleware.logging_middleware import LoggingMiddleware
from jira_assistant.models.schemas import ErrorResponse
from jira_assistant.routes import health, process
from jira_assistant.utils.logger import get_logger

settings = get_settings()
logger = get_logger(__name__)

app = FastAPI(
    title="Jira AI Assistant",
    description="Find Jira tickets matching a natural-language query with an LLM",
    version=__version__
)

# Middleware runs bottom-up: CORS sees the request first
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(process.router)
app.include_router(health.router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies get the same error shape as missing parameters"""
    logger.warning(f"Rejected request to {request.url.path}: {len(exc.errors())} validation errors")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error=MissingParametersError.default_message).model_dump(),
    )


@app.get("/")
async def root():
    return {"message": "Jira AI Assistant API", "version": __version__}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.fastapi_host, port=settings.fastapi_port)
