#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
FastAPI Web Server - REST API for PageFlow.

Endpoints:
    POST /api/convert/docx - JSON {html, options} → high-fidelity DOCX
    POST /api/convert/pdf  - JSON {html, options} → print PDF
    POST /api/upload       - multipart .html upload → DOCX or PDF
    GET  /health           - liveness

Usage:
    # Start server
    uvicorn api.main:app --host 127.0.0.1 --port 3005

    # Or run directly
    python -m api.main

Configuration:
    Environment variables (see config/settings.py):
    - PAGEFLOW_MAX_UPLOAD_SIZE_MB: Max upload size (default: 10)
    - PAGEFLOW_NAVIGATION_TIMEOUT_MS: Page load bound (default: 60000)
"""

from fastapi import FastAPI, Depends, File, Form, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field
from typing import Any, Awaitable, Callable, Dict, Optional
from urllib.parse import quote
from pathlib import Path
import sys

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.constants import DOCX_MIME, PDF_MIME
from config.logging_config import get_logger
from config.settings import settings
from pageflow.exceptions import ConversionError, HtmlValidationError
from pageflow.hf_converter import HighFidelityConverter
from pageflow.page_format import ConversionOptions
from pageflow.pdf_converter import convert_html_to_pdf

logger = get_logger(__name__)

DEFAULT_DOCX_NAME = "converted-document.docx"
DEFAULT_PDF_NAME = "converted-document.pdf"

PdfRenderer = Callable[[str, ConversionOptions], Awaitable[bytes]]


# =============================================================================
# Pydantic Models for API
# =============================================================================

class ConvertOptionsModel(BaseModel):
    """Conversion options accepted in request bodies"""
    format: Optional[str] = Field(default=None, description="'A4' (default) or 'slide'")
    orientation: str = Field(default="portrait", description="portrait | landscape (A4 only)")
    title: Optional[str] = Field(default=None, description="Document title metadata")
    filename: Optional[str] = Field(default=None, description="Suggested download filename")
    width: Optional[int] = Field(default=None, description="PDF viewport width (px)")
    height: Optional[int] = Field(default=None, description="PDF viewport height (px)")
    margin: Optional[Dict[str, str]] = Field(default=None, description="PDF margins, CSS lengths")

    def to_options(self) -> ConversionOptions:
        return ConversionOptions.from_dict(self.model_dump(exclude_none=True))


class ConvertRequest(BaseModel):
    """Request model for HTML conversion"""
    # Untyped so that non-string input reaches validate_html and gets its message
    html: Any = Field(default=None, description="HTML document source")
    options: ConvertOptionsModel = Field(default_factory=ConvertOptionsModel)


# =============================================================================
# App
# =============================================================================

app = FastAPI(
    title="PageFlow",
    description="HTML → paginated DOCX / PDF",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "X-Suggested-Filename", "X-Page-Count"],
)


def get_hf_converter() -> HighFidelityConverter:
    """One converter per request; each conversion launches its own browser"""
    return HighFidelityConverter(config=settings)


def get_pdf_renderer() -> PdfRenderer:
    async def render(html: str, options: ConversionOptions) -> bytes:
        return await convert_html_to_pdf(html, options, settings)
    return render


@app.exception_handler(HtmlValidationError)
async def validation_error_handler(request: Request, exc: HtmlValidationError):
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(ConversionError)
async def conversion_error_handler(request: Request, exc: ConversionError):
    logger.error(f"Conversion error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": str(exc)})


def content_disposition(filename: str) -> str:
    """RFC 6266 attachment header with an ASCII fallback name"""
    fallback = filename.encode("ascii", "ignore").decode("ascii").replace('"', "") or "download"
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


def file_response(data: bytes, media_type: str, filename: str, extra: Optional[Dict[str, str]] = None) -> Response:
    headers = {
        "Content-Disposition": content_disposition(filename),
        "X-Suggested-Filename": quote(filename),
    }
    headers.update(extra or {})
    return Response(content=data, media_type=media_type, headers=headers)


async def _docx_response(converter: HighFidelityConverter, html: Any, options: ConversionOptions) -> Response:
    data, report = await converter.convert_with_report(html, options)
    return file_response(
        data,
        DOCX_MIME,
        options.filename or DEFAULT_DOCX_NAME,
        {"X-Page-Count": str(report.page_count)},
    )


async def _pdf_response(renderer: PdfRenderer, html: Any, options: ConversionOptions) -> Response:
    data = await renderer(html, options)
    return file_response(data, PDF_MIME, options.filename or DEFAULT_PDF_NAME)


# =============================================================================
# Routes
# =============================================================================

@app.get("/health")
async def health():
    return {"status": "ok", "service": "pageflow"}


@app.post("/api/convert/docx")
async def convert_docx(
    body: ConvertRequest,
    converter: HighFidelityConverter = Depends(get_hf_converter),
):
    """Convert HTML to a high-fidelity DOCX"""
    return await _docx_response(converter, body.html, body.options.to_options())


@app.post("/api/convert/pdf")
async def convert_pdf(
    body: ConvertRequest,
    renderer: PdfRenderer = Depends(get_pdf_renderer),
):
    """Convert HTML to PDF through the browser print engine"""
    return await _pdf_response(renderer, body.html, body.options.to_options())


@app.post("/api/upload")
async def upload_and_convert(
    html_file: UploadFile = File(..., alias="htmlFile"),
    target: str = Form(default="docx"),
    format: Optional[str] = Form(default=None),
    orientation: str = Form(default="portrait"),
    title: Optional[str] = Form(default=None),
    converter: HighFidelityConverter = Depends(get_hf_converter),
    renderer: PdfRenderer = Depends(get_pdf_renderer),
):
    """Convert an uploaded .html file"""
    filename = html_file.filename or ""
    if html_file.content_type != "text/html" and not filename.lower().endswith(".html"):
        return JSONResponse(status_code=400, content={"error": "Only HTML files are allowed"})
    if target not in ("docx", "pdf"):
        return JSONResponse(status_code=400, content={"error": f"Unsupported target: {target}"})

    limit = settings.max_upload_bytes
    too_large = JSONResponse(
        status_code=413,
        content={"error": f"File size too large. Maximum size is {settings.max_upload_size_mb}MB."},
    )
    if html_file.size is not None and html_file.size > limit:
        return too_large

    # Never buffer more than one byte past the limit
    raw = await html_file.read(limit + 1)
    if len(raw) > limit:
        return too_large

    try:
        html = raw.decode("utf-8")
    except UnicodeDecodeError:
        return JSONResponse(status_code=400, content={"error": "HTML file must be UTF-8 encoded"})

    stem = Path(filename).stem or "converted-document"
    options = ConversionOptions(
        format=format,
        orientation=orientation,
        title=title,
        filename=f"{stem}.{target}",
    )

    if target == "pdf":
        return await _pdf_response(renderer, html, options)
    return await _docx_response(converter, html, options)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
