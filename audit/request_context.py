import uuid
from flask import g, has_app_context, has_request_context, request

REQUEST_ID_HEADER = "X-Request-Id"

def get_request_id() -> str:
    # Checkout polling logs from timer threads, outside any Flask context
    if not has_app_context():
        return "unknown"
    return getattr(g, "request_id", None) or "unknown"

def init_request_id():
    rid = None
    if has_request_context():
        rid = request.headers.get(REQUEST_ID_HEADER)
    if not rid:
        rid = str(uuid.uuid4())
    g.request_id = rid
    return rid
