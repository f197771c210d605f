#!/usr/bin/env python3
"""
Script to render an application status document to a PDF file.
Usage: python scripts/render_application_document.py <application_id> <output_file> [base_uri]
"""

import sys
import uuid
from pathlib import Path

from app.config import load_config
from app.database import SessionLocal
from app.exceptions import ApplicationDocumentError
from app.services.document_generator import ApplicationDocumentGenerator


def main(argv) -> int:
    if len(argv) < 3:
        print(__doc__.strip())
        return 2

    try:
        application_id = uuid.UUID(argv[1])
    except ValueError:
        print(f"Invalid application id: {argv[1]}")
        return 2
    output_file = Path(argv[2])

    config = load_config()
    base_uri = argv[3] if len(argv) > 3 else config.template_base_uri

    db = SessionLocal()
    try:
        content = ApplicationDocumentGenerator(db, config).generate(application_id, base_uri)
    except ApplicationDocumentError as e:
        print(f"Error: {e}")
        return 1
    finally:
        db.close()

    output_file.write_bytes(content)
    print(f"Wrote {len(content)} bytes to {output_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
