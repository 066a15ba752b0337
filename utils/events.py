import json
from flask import current_app, request


def _client_ip():
    try:
        return request.headers.get("X-Forwarded-For", request.remote_addr)
    except RuntimeError:
        # no request (CLI commands)
        return None


def log_event(action: str, user_id=None, entity=None, entity_id=None, metadata=None):
    """
    One log line per security-relevant event. Goes to the app logger only,
    nothing is written to the database.
    """
    current_app.logger.info(
        "%s user=%s entity=%s:%s ip=%s%s",
        action,
        user_id,
        entity,
        entity_id,
        _client_ip(),
        " " + json.dumps(metadata, sort_keys=True, default=str) if metadata else "",
    )
