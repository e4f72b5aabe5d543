"""
Request entry point and JSON response envelopes.

handle_query() takes query-string style parameters (``sponsor`` and
optional ``website``), runs the aggregation pipeline and maps the outcome
to a Response a hosting layer can send as-is:
- 200 {"facts": [...], "sources": [{"type", "url"}, ...]}
- 400 {"error": "Missing sponsor"}
- 500 {"error": "Server error"}
"""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
from typing import Any, Mapping

from .aggregator import aggregate_sponsor
from .config import AppConfig
from .core.types import InvalidQueryError, PipelineResult
from .sources import Fetcher

logger = logging.getLogger(__name__)

JSON_HEADERS = {"content-type": "application/json; charset=utf-8"}


@dataclass
class Response:
    """Serialized response envelope.

    Attributes:
        status_code: HTTP status code (200, 400 or 500)
        body: JSON text
        headers: Response headers, always JSON with a UTF-8 charset
    """
    status_code: int
    body: str
    headers: dict[str, str] = field(default_factory=lambda: dict(JSON_HEADERS))

    def json(self) -> Any:
        return json.loads(self.body)


def json_response(status_code: int, payload: dict[str, Any]) -> Response:
    return Response(status_code=status_code, body=json.dumps(payload, ensure_ascii=False))


def response_from_result(result: PipelineResult) -> Response:
    return json_response(200, result.to_dict())


def error_response(status_code: int, message: str) -> Response:
    return json_response(status_code, {"error": message})


async def handle_query(
    params: Mapping[str, str | None],
    cfg: AppConfig | None = None,
    fetcher: Fetcher | None = None,
) -> Response:
    """Run the pipeline for one inbound query and build its envelope.

    Args:
        params: Query parameters; ``sponsor`` is required, ``website`` optional
        cfg: Application configuration, defaults to AppConfig()
        fetcher: Optional HTTP capability, an HttpFetcher is opened otherwise

    Returns:
        Response with a success or error envelope; never raises
    """
    sponsor = params.get("sponsor") or ""
    website = params.get("website") or None
    try:
        result = await aggregate_sponsor(sponsor, website, cfg=cfg, fetcher=fetcher)
    except InvalidQueryError as exc:
        return error_response(400, str(exc))
    except Exception:  # noqa: BLE001
        logger.exception("Unhandled error while aggregating sponsor facts", extra={"event": "server_error"})
        return error_response(500, "Server error")
    return response_from_result(result)
