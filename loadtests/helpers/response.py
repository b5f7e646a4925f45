"""Response error extraction for load test logging.

Storefront API errors come in two shapes:

- Request validation (422): {"detail": [{"loc": [...], "msg": "...", "type": "..."}]}
- Domain and auth errors (400/401/403/404/409): {"error": "msg"} or
  {"error": {"field": ["msg", ...]}}
"""

from requests import Response


def _flatten(value) -> str:
    if isinstance(value, list):
        return "; ".join(str(v) for v in value)
    return str(value)


def extract_error_detail(response: Response) -> str:
    """Compact, human-readable error message for Locust failures and log lines."""
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    if isinstance(body.get("detail"), list):
        parts = []
        for err in body["detail"]:
            loc = ".".join(str(p) for p in err.get("loc", []))
            msg = err.get("msg", str(err))
            parts.append(f"{loc}: {msg}" if loc else msg)
        return " | ".join(parts)

    if "error" in body:
        error = body["error"]
        if isinstance(error, dict):
            return " | ".join(f"{field}: {_flatten(msgs)}" for field, msgs in error.items())
        return str(error)

    return str(body)[:300]
