"""FastAPI application exposing the glossa actions as a local JSON API.

Requests carry the document as a list of lines; responses return the
lines after the action. The server keeps no documents.
"""

import secrets
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request, Security
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from .. import __version__
from ..adapters.line_buffer import LineBuffer
from ..core.annotations import find_annotation_line, parse_annotations
from ..core.context import gather_surrounding_context
from ..core.instructions import extract_instruction
from ..core.paragraphs import find_paragraph_bounds_near, get_paragraph_text
from ..errors import CompletionError, EmptyCompletionResult, UserInputAbsent


class LinesRequest(BaseModel):
    lines: list[str]
    line: int


class AnnotateRequest(LinesRequest):
    items: list[str]


class ActRequest(BaseModel):
    text: str
    action: str
    prompt: str | None = None


class AskRequest(BaseModel):
    query: str


def _document(req: LinesRequest) -> LineBuffer:
    doc = LineBuffer(req.lines)
    if not 0 <= req.line < doc.line_count():
        raise HTTPException(status_code=422, detail=f"Line {req.line} out of range")
    return doc


def create_app(runtime: Any, token: str | None = None, enable_cors: bool = False) -> FastAPI:
    """
    Create FastAPI application with runtime injected.

    Args:
        runtime: Runtime instance with settings and assistant
        token: Bearer token for authentication (None to disable auth)
        enable_cors: Enable CORS middleware

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Glossa API",
        description="Local JSON API for paragraph annotation and rewriting",
        version=__version__,
        docs_url="/docs" if token is None else None,
        redoc_url="/redoc" if token is None else None,
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    if token:
        security_scheme = HTTPBearer(auto_error=False)

        async def verify_token(
            credentials: HTTPAuthorizationCredentials | None = Security(security_scheme),  # noqa: B008
        ) -> None:
            """Verify bearer token."""
            if credentials is None or credentials.credentials != token:
                raise HTTPException(status_code=401, detail="Invalid or missing token")
    else:

        async def verify_token() -> None:
            """No-op when auth is disabled."""
            return None

    @app.exception_handler(UserInputAbsent)
    async def user_input_absent(request: Request, exc: UserInputAbsent) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(EmptyCompletionResult)
    async def empty_completion(request: Request, exc: EmptyCompletionResult) -> JSONResponse:
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    @app.exception_handler(CompletionError)
    async def completion_error(request: Request, exc: CompletionError) -> JSONResponse:
        status = {"auth": 401, "rate_limit": 429}.get(exc.kind, 502)
        return JSONResponse(status_code=status, content={"detail": str(exc), "kind": exc.kind})

    @app.get("/health")
    async def health(auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "version": __version__}

    @app.post("/paragraph")
    async def paragraph(req: LinesRequest, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Describe the paragraph at a line: bounds, annotations, instruction, context."""
        doc = _document(req)
        bounds = find_paragraph_bounds_near(doc, req.line)
        if bounds is None:
            return {"bounds": None}

        text = get_paragraph_text(doc, bounds.start_line, bounds.end_line)
        annotation_line = find_annotation_line(doc, bounds.end_line)
        annotations = parse_annotations(doc.get_line(annotation_line)) if annotation_line is not None else []
        instruction = extract_instruction(text)
        ctx = runtime.config.context

        return {
            "bounds": {"start_line": bounds.start_line, "end_line": bounds.end_line},
            "text": text,
            "annotation_line": annotation_line,
            "annotations": annotations,
            "instruction": instruction.instruction if instruction else None,
            "context": gather_surrounding_context(
                doc, bounds.start_line, bounds.end_line, ctx.before, ctx.after
            ),
        }

    @app.post("/annotations")
    async def annotations(req: AnnotateRequest, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Append annotations under the paragraph at a line."""
        doc = _document(req)
        runtime.assistant.annotate(doc, req.line, req.items)
        return {"lines": doc.lines}

    @app.post("/rewrite")
    async def rewrite(req: LinesRequest, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Rewrite the paragraph at a line with its annotations."""
        doc = _document(req)
        result = await runtime.assistant.rewrite(doc, req.line)
        return {"lines": doc.lines, "text": result.text}

    @app.post("/inspire")
    async def inspire(req: LinesRequest, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Follow the {instruction} of the paragraph at a line."""
        doc = _document(req)
        result = await runtime.assistant.inspire(doc, req.line)
        return {"lines": doc.lines, "bullets": result.bullets}

    @app.post("/act")
    async def act(req: ActRequest, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Run a block action on a piece of text."""
        try:
            text = await runtime.assistant.block_action(req.text, req.action, req.prompt)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e)) from e
        return {"text": text}

    @app.post("/ask")
    async def ask(req: AskRequest, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Answer a free question."""
        return {"text": await runtime.assistant.ask(req.query)}

    return app


def generate_token() -> str:
    """Generate a random bearer token."""
    return secrets.token_urlsafe(32)
