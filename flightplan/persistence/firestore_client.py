"""Firestore async client factory."""

from __future__ import annotations

import logging

from google.cloud.firestore import AsyncClient

logger = logging.getLogger(__name__)


def create_firestore_client(project: str | None = None) -> AsyncClient:
    """Return a Firestore AsyncClient.

    Uses Application Default Credentials (ADC). ``project`` overrides the
    project inferred from the environment.
    """
    client = AsyncClient(project=project)
    logger.info("Using Google Cloud Firestore (project=%s)", project or "<default>")
    return client
