"""
Ticket processing API route

POST /api/process takes Jira access parameters, model access parameters and
a natural-language query, and returns the tickets the model judged relevant.
This route is the single place where pipeline errors are turned into HTTP
responses.
"""
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from jira_assistant.exceptions import AssistantError, MissingParametersError
from jira_assistant.models.schemas import ProcessRequest, ProcessResponse, ErrorResponse
from jira_assistant.services.pipeline import process_tickets
from jira_assistant.utils.logger import get_logger
from jira_assistant.utils.validators import is_blank

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["process"])

UNEXPECTED_ERROR_MESSAGE = "Failed to process tickets"


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@router.post(
    "/process",
    response_model=ProcessResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Find tickets matching a natural-language query",
)
async def process(request: ProcessRequest):
    """
    Fetch Jira tickets, ask the model which match the prompt, return the matches.

    Returns:
        ProcessResponse on success, ErrorResponse with 400/500 otherwise
    """
    try:
        if request.jira_config is None or request.ai_config is None or is_blank(request.prompt):
            raise MissingParametersError()

        results = await process_tickets(
            request.jira_config,
            request.ai_config,
            request.prompt,
        )
        return ProcessResponse(results=results)

    except AssistantError as e:
        logger.warning(f"Processing failed ({type(e).__name__}): {e.message}")
        return error_response(e.message, e.status_code)
    except Exception as e:
        logger.error(f"Unexpected error while processing tickets: {e}", exc_info=True)
        return error_response(UNEXPECTED_ERROR_MESSAGE, 500)
