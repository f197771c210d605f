"""
Main FastAPI application for application status documents.
Handles document requests and PDF delivery.
"""

from fastapi import FastAPI, HTTPException, Depends, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from typing import Optional
from uuid import UUID
import os
from sqlalchemy.orm import Session

from app.config import DocumentConfig, load_config
from app.database import get_db, init_db
from app.exceptions import (
    ApplicationNotFound,
    ReviewRecordMissing,
    TemplateLocationRejected,
    UnsupportedApplicationState,
)
from app.services.document_generator import ApplicationDocumentGenerator, is_permitted_base_uri
from app.services.pdf_generator import PDFGenerator
from app.services.view_generator import HtmlViewGenerator

app = FastAPI(
    title="Application Documents",
    description="Status documents for investment applications",
    version="1.0.0"
)

# For local development allow all origins unless CORS_ALLOW_ORIGINS is set.
_cors_origins_env = os.getenv("CORS_ALLOW_ORIGINS")
if _cors_origins_env and _cors_origins_env.strip() != "*":
    _cors_origins = [o.strip() for o in _cors_origins_env.split(",") if o.strip()]
else:
    _cors_origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_config = load_config()
# Shared across requests; holds the HTTP session used for remote templates.
_view_generator = HtmlViewGenerator(
    timeout=_config.template_fetch_timeout, template_root=_config.template_root
)
_pdf_generator = PDFGenerator()


def get_config() -> DocumentConfig:
    return _config


def get_document_generator(
    db: Session = Depends(get_db),
    config: DocumentConfig = Depends(get_config),
) -> ApplicationDocumentGenerator:
    return ApplicationDocumentGenerator(
        db, config, view_generator=_view_generator, pdf_generator=_pdf_generator
    )


@app.on_event("startup")
async def startup_event():
    """Initialize database on startup."""
    init_db()


@app.on_event("shutdown")
async def shutdown_event():
    _view_generator.close()


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "application-documents",
        "version": "1.0.0"
    }


@app.get("/api/applications/{application_id}/document")
def get_application_document(
    application_id: UUID,
    base_uri: Optional[str] = Query(None, description="Base URI templates are resolved against"),
    generator: ApplicationDocumentGenerator = Depends(get_document_generator),
    config: DocumentConfig = Depends(get_config),
):
    """Render the status document for an application as a PDF download."""
    base_uri = base_uri or config.template_base_uri
    if not is_permitted_base_uri(base_uri, config):
        raise HTTPException(status_code=400, detail="base_uri is not an allowed template location")

    try:
        content = generator.generate(application_id, base_uri)
    except ApplicationNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (UnsupportedApplicationState, ReviewRecordMissing) as e:
        raise HTTPException(status_code=409, detail=str(e))
    except TemplateLocationRejected as e:
        raise HTTPException(status_code=400, detail=str(e))

    filename = f"application_{application_id}.pdf"
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
