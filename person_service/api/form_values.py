"""Form Values — decode any inbound request into the flat key-value map the services read.

Invariants:
    - Query parameters are read first; body fields override them
    - Body may be urlencoded/multipart form or a JSON object; anything else is ignored
    - Every value is a str (JSON scalars stringified, null → "")
    - Malformed JSON body → InputValidationError
"""

import json

from fastapi import Request

from person_service.core.errors import InputValidationError


def _stringify(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


async def read_form_values(request: Request) -> dict[str, str]:
    """FastAPI dependency: merged query + body key-value map."""
    values = {key: value for key, value in request.query_params.items()}
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(
        ("application/x-www-form-urlencoded", "multipart/form-data"),
    ):
        form = await request.form()
        for key, value in form.items():
            if isinstance(value, str):
                values[key] = value
    elif content_type.startswith("application/json"):
        raw = await request.body()
        if raw.strip():
            try:
                body = json.loads(raw)
            except ValueError:
                raise InputValidationError("Request body is not valid JSON")
            if not isinstance(body, dict):
                raise InputValidationError("JSON body must be an object")
            for key, value in body.items():
                values[str(key)] = _stringify(value)
    return values
