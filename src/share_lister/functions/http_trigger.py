"""HTTP trigger blueprint — health check and directory listing endpoints."""

import json
import logging

import azure.functions as func

from share_lister import __version__
from share_lister.config import load_config
from share_lister.files.models import Entry
from share_lister.orchestration.lister import directory_lister_from_config

logger = logging.getLogger(__name__)

bp = func.Blueprint()

_TRUE_VALUES = {"1", "true", "yes"}


def _entry_to_dict(entry: Entry) -> dict[str, object]:
    return {
        "path": entry.path,
        "mode": entry.mode.value,
        "etag": entry.etag,
        "last_modified": entry.last_modified.isoformat(),
        "content_length": entry.content_length,
    }


@bp.route(route="health", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def health_check(req: func.HttpRequest) -> func.HttpResponse:
    """Health check endpoint.

    Returns service status and version.
    """
    logger.info("[health_check] health check requested")

    try:
        body = json.dumps({"status": "ok", "version": __version__})
        return func.HttpResponse(body, status_code=200, mimetype="application/json")

    except Exception:
        logger.error("[health_check] health check failed", exc_info=True)
        error_body = json.dumps({"status": "error", "message": "Internal server error"})
        return func.HttpResponse(error_body, status_code=500, mimetype="application/json")


@bp.route(route="list", methods=["GET"], auth_level=func.AuthLevel.FUNCTION)
def list_directory(req: func.HttpRequest) -> func.HttpResponse:
    """List a directory of the configured share.

    Query parameters:
        path: Share-relative directory (default: share root).
        recursive: "true" to walk the whole subtree instead of direct children.

    A directory that does not exist produces an empty entry list.
    """
    path = req.params.get("path", "")
    recursive = req.params.get("recursive", "").lower() in _TRUE_VALUES
    logger.info("[list_directory] listing requested; path:%s;recursive:%s", path, recursive)

    try:
        config = load_config()
        lister = directory_lister_from_config(config)
        entries = list(lister.walk(path)) if recursive else lister.list_directory(path)

        body = json.dumps(
            {
                "status": "ok",
                "path": path,
                "entry_count": len(entries),
                "entries": [_entry_to_dict(entry) for entry in entries],
            }
        )
        return func.HttpResponse(body, status_code=200, mimetype="application/json")

    except Exception:
        logger.error("[list_directory] listing failed; path:%s", path, exc_info=True)
        error_body = json.dumps({"status": "error", "message": "Internal server error"})
        return func.HttpResponse(error_body, status_code=500, mimetype="application/json")
