from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from classifier import Classifier
from completion import CompletionClient
from config import load_settings
from errors import CompletionError
from logging_config import configure_logging, get_logger
from models import ClassifiedRecord, ClassifyRequest, ErrorResponse

logger = get_logger("main")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: a missing API key or bad timezone raises ConfigurationError here
    settings = load_settings()
    configure_logging(settings.log_level)
    completion = CompletionClient(
        settings.anthropic_api_key,
        model=settings.model,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
        timeout=settings.timeout,
    )
    app.state.classifier = Classifier(completion, settings.policy, settings.timezone)
    logger.info(f"Ready (model={settings.model}, profile={settings.profile}, timezone={settings.timezone})")
    yield
    # Shutdown
    await completion.close()


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = "Only POST allowed" if exc.status_code == 405 else exc.detail
    return JSONResponse(status_code=exc.status_code, content={"error": detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request body") if errors else "Invalid request body"
    return JSONResponse(status_code=400, content={"error": f"Invalid request body: {message}"})


def get_classifier(request: Request) -> Classifier:
    return request.app.state.classifier


@app.options("/")
def preflight() -> Response:
    return Response(status_code=204, headers=CORS_HEADERS)


@app.post(
    "/",
    response_model=ClassifiedRecord,
    responses={400: {"model": ErrorResponse}, 405: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def classify(
    body: Optional[ClassifyRequest] = None,
    classifier: Classifier = Depends(get_classifier),
):
    """Classify free-form text as a Task, Event or Note."""
    input_text = body.input_text() if body else None
    if not input_text:
        raise HTTPException(status_code=400, detail="Missing text")

    try:
        record = await classifier.classify(input_text)
    except CompletionError as e:
        return JSONResponse(status_code=500, content={"error": str(e)})
    except Exception as e:
        logger.exception("Unexpected error while classifying")
        return JSONResponse(status_code=500, content={"error": str(e)})

    return record


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
