import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from . import config
from .errors import GenerationError, InvalidRequestBody, MissingInput, UpstreamFailure
from .llm_client import GenerationClient
from .models import CommitResult, ErrorResponse, GenerationRequest
from .parsing import parse_commit_result
from .prompts import build_prompt
from .validation import validate_request

# --- Logging Setup ---
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

if not config.GEMINI_API_KEY:
    logger.warning("GEMINI_API_KEY environment variable not set. Generation requests will fail until it is configured.")

# Limiter based on the client's remote IP address
limiter = Limiter(key_func=get_remote_address, default_limits=[config.DEFAULT_RATE_LIMIT])

# --- FastAPI App Initialization ---
app = FastAPI(
    title="Commit Message Generator API",
    description=f"Generates conventional commit messages from change descriptions and git diffs ({config.MODEL_NAME}).",
    version="0.1.0",
)

# --- Apply Middleware & Exception Handlers ---
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)


@app.exception_handler(GenerationError)
async def generation_error_handler(request: Request, exc: GenerationError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Reports unreadable request bodies in the same {"error"} shape as other failures."""
    errors = exc.errors()
    logger.info(f"Rejecting malformed request body: {errors}")
    # No body at all means neither a description nor a diff was sent
    if any(e.get("type") == "missing" and tuple(e.get("loc", ())) == ("body",) for e in errors):
        error = MissingInput()
    else:
        error = InvalidRequestBody()
    return await generation_error_handler(request, error)


# --- API Endpoints ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """Simple health check endpoint."""
    return {"status": "ok", "model": config.MODEL_NAME}


@app.post(
    "/api/generate",
    response_model=CommitResult,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    tags=["Commit Generation"]
)
async def generate_commit_message_endpoint(payload: GenerationRequest):
    """
    Receives a change description and/or git diff and returns a conventional
    commit message suggestion with three alternatives.

    Rate limited per client IP address.
    """
    generation_request = validate_request(payload)
    logger.info(
        f"Received request for commit message generation. "
        f"Description length: {len(generation_request.changes or '')}, "
        f"Diff length: {len(generation_request.git_diff or '')}, "
        f"Preferred type: '{generation_request.commit_type}'"
    )

    try:
        prompt = build_prompt(generation_request)
        async with GenerationClient(
            api_key=config.GEMINI_API_KEY,
            model=config.MODEL_NAME,
            base_url=config.LLM_BASE_URL,
            timeout=config.LLM_TIMEOUT,
        ) as client:
            raw_response = await client.generate(prompt)
        result = parse_commit_result(raw_response)
    except GenerationError as e:
        logger.warning(f"Commit message generation failed ({type(e).__name__}): {e.message}")
        raise
    except Exception as e:
        logger.error(f"Error during commit message generation: {e}", exc_info=True)
        raise UpstreamFailure() from e

    logger.info(f"Generated commit message: '{result.commit_message}' with {len(result.alternatives)} alternatives")
    return result
