# app/deps.py
"""FastAPI dependencies."""

import json
from typing import Annotated, Any

from fastapi import Depends, Request
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from app.db import get_session

# Database session dependency
DBSession = Annotated[Session, Depends(get_session)]


def get_templates(request: Request) -> Jinja2Templates:
    """Templates configured for the running application."""
    return request.app.state.templates


Templates = Annotated[Jinja2Templates, Depends(get_templates)]


async def get_submitted_data(request: Request) -> Any:
    """
    Read a submitted body as JSON or as form fields.

    An empty JSON body reads as an empty object. Malformed JSON is returned
    as ``None`` so validation reports it like any other non-mapping body.
    A form field sent more than once is returned as a list, which fails the
    string check instead of silently keeping one of the values.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.split(";")[0].strip().lower() == "application/json":
        if not (await request.body()).strip():
            return {}
        try:
            return await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None
    form = await request.form()
    data = {}
    for key in form.keys():
        values = form.getlist(key)
        data[key] = values[0] if len(values) == 1 else values
    return data


SubmittedData = Annotated[Any, Depends(get_submitted_data)]
