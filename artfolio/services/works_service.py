"""
Work records in Firestore: create, fetch, delete.

Media never passes through here. The client uploads images to storage under
`image_path` and removes them itself after a delete.

The Firebase `db` client is accessed at call-time via the integration module
so it picks up the instance initialized during the FastAPI lifespan.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from artfolio.config import settings
from artfolio.core.errors import ForbiddenError, NotFoundError, ServiceUnavailableError
from artfolio.detection.types import DetectionResult
from artfolio.integrations import firebase as firebase_module
from artfolio.schemas.works import WorkKind

logger = logging.getLogger(__name__)


def _get_db():
    db = firebase_module.db
    if not db:
        raise ServiceUnavailableError("Database service unavailable.")
    return db


def _works():
    return _get_db().collection(settings.works_collection)


def create_work(
    author_id: str,
    kind: WorkKind,
    title: str,
    detection: DetectionResult,
    body: Optional[str] = None,
    image_path: Optional[str] = None,
    description: Optional[str] = None,
) -> dict:
    work_id = uuid.uuid4().hex
    work = {
        "id": work_id,
        "author_id": author_id,
        "kind": kind.value,
        "title": title,
        "body": body,
        "image_path": image_path,
        "description": description,
        "detection": {"provider": detection.provider, "score": detection.raw_score},
        "created_at": datetime.now(timezone.utc),
    }
    _works().document(work_id).set(work)
    logger.info(f"[PUBLISH] Work {work_id} ({kind.value}) created by {author_id}")
    return work


def get_work(work_id: str) -> dict:
    doc = _works().document(work_id).get()
    if not doc.exists:
        raise NotFoundError("Work not found")
    return doc.to_dict()


def delete_work(work_id: str, user_id: str) -> Optional[str]:
    """Deletes a work owned by user_id and returns its image_path for storage cleanup."""
    doc_ref = _works().document(work_id)
    doc = doc_ref.get()
    if not doc.exists:
        raise NotFoundError("Work not found")

    work = doc.to_dict()
    if work.get("author_id") != user_id:
        raise ForbiddenError("You can only delete your own works")

    doc_ref.delete()
    logger.info(f"[WORKS] Work {work_id} deleted by {user_id}")
    return work.get("image_path")
