"""
Append-only store for propagation requests.

Requests live in process memory for the lifetime of the app. There is no update
or delete path: a zone change on the results page creates a new request.
"""

from __future__ import annotations
import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Dict, Mapping, Optional

from ..models import PropagationRequest

logger = logging.getLogger(__name__)


class RequestStore:
    def __init__(self):
        self._requests: Dict[str, PropagationRequest] = {}
        self._lock = threading.Lock()

    def create_request(self, data: Mapping[str, str]) -> PropagationRequest:
        """
        Store a new request built from validated form data.

        Args:
            data: Mapping with plant_id, zone, maturity, environment

        Returns:
            The created PropagationRequest (new uuid4 id, UTC timestamp)
        """
        request = PropagationRequest(
            id=str(uuid.uuid4()),
            plant_id=data["plant_id"],
            zone=data["zone"],
            maturity=data["maturity"],
            environment=data["environment"],
            created_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._requests[request.id] = request
        logger.info(f"[Requests] Created request {request.id} for {request.plant_id} in zone {request.zone}")
        return request

    def get_request(self, request_id: str) -> Optional[PropagationRequest]:
        with self._lock:
            return self._requests.get(request_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._requests)
