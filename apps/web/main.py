"""FastAPI web application for lockparse."""

import logging
from typing import Any, Optional

from fastapi import FastAPI, File, HTTPException, UploadFile
from pydantic import BaseModel

from lockparse.config import DEFAULT_SOURCE_LABEL
from lockparse.errors import LockfileError
from lockparse.lookup import resolve_dependencies, unique_packages
from lockparse.parse_yarn import parse_lockfile

logger = logging.getLogger(__name__)

app = FastAPI(
    title="lockparse",
    description="Parse yarn.lock files into structured package metadata",
    version="0.1.0",
)


class ParseRequest(BaseModel):
    """Request model for parsing lockfile text."""
    content: str
    source_label: Optional[str] = None


class ParseResponse(BaseModel):
    """Response model for a parsed lockfile."""
    version: Optional[int]
    entries: dict[str, Any]
    comments: list[str]
    package_count: int


class ResolveRequest(BaseModel):
    """Request model for resolving package.json ranges against a lockfile."""
    content: str
    dependencies: dict[str, str]


class ResolveResponse(BaseModel):
    """Response model with the locked version of each dependency."""
    resolved: dict[str, Optional[str]]
    missing: list[str]


@app.get("/health")
async def health():
    """Liveness probe."""
    return {"status": "ok"}


@app.post("/api/parse", response_model=ParseResponse)
async def parse_content(request: ParseRequest):
    """Parse lockfile text."""
    if not request.content.strip():
        raise HTTPException(status_code=400, detail="No content provided")

    try:
        lockfile = parse_lockfile(request.content, request.source_label or DEFAULT_SOURCE_LABEL)
    except LockfileError as e:
        logger.info("Rejected lockfile: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    return ParseResponse(
        version=lockfile.version,
        entries=lockfile.entries,
        comments=lockfile.comments,
        package_count=len(unique_packages(lockfile.entries)),
    )


@app.post("/api/upload", response_model=ParseResponse)
async def upload_file(file: UploadFile = File(...)):
    """Upload and parse a yarn.lock file."""
    if not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    content = await file.read()
    try:
        text_content = content.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File must be valid UTF-8 text")

    return await parse_content(ParseRequest(content=text_content, source_label=file.filename))


@app.post("/api/resolve", response_model=ResolveResponse)
async def resolve(request: ResolveRequest):
    """Look up the locked version of each `name: range` dependency."""
    try:
        lockfile = parse_lockfile(request.content)
    except LockfileError as e:
        raise HTTPException(status_code=400, detail=str(e))

    resolved = resolve_dependencies(lockfile.entries, request.dependencies)
    return ResolveResponse(
        resolved=resolved,
        missing=[name for name, version in resolved.items() if version is None],
    )
