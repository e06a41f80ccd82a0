# app/routers/contacts.py
"""Contact form, submission and listing pages."""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from sqlalchemy.exc import SQLAlchemyError

from app import crud
from app.deps import DBSession, SubmittedData, Templates
from app.schemas import ContactRead, ContactValidationError, parse_contact

logger = logging.getLogger(__name__)

router = APIRouter(tags=["contacts"])

SAVE_SUCCESS = "Contato salvo com sucesso"
SAVE_FAILED = "Erro ao salvar contato."
LIST_FAILED = "Erro ao buscar contatos."


@router.get("/", response_class=HTMLResponse)
def contact_form(request: Request, templates: Templates) -> HTMLResponse:
    """Render the contact submission form."""
    return templates.TemplateResponse(request, "index.html")


@router.post("/", response_class=PlainTextResponse)
def submit_contact(data: SubmittedData, session: DBSession) -> PlainTextResponse:
    """
    Validate and store a submitted contact.

    Returns 400 with every violated rule joined by "; " when the payload is
    invalid, 200 once the contact is committed.
    """
    try:
        contact_data = parse_contact(data)
    except ContactValidationError as exc:
        return PlainTextResponse(
            "; ".join(exc.messages), status_code=status.HTTP_400_BAD_REQUEST
        )

    try:
        contact = crud.create_contact(session, contact_data)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to save contact")
        return PlainTextResponse(
            SAVE_FAILED, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    logger.info("Saved contact id=%s", contact.id)
    return PlainTextResponse(SAVE_SUCCESS)


@router.get("/contatos", response_class=HTMLResponse)
def contact_list(
    request: Request, session: DBSession, templates: Templates
) -> Response:
    """Render every stored contact."""
    try:
        contacts = crud.list_contacts(session)
    except SQLAlchemyError:
        logger.exception("Failed to list contacts")
        return PlainTextResponse(
            LIST_FAILED, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    contatos = [ContactRead.model_validate(contact) for contact in contacts]
    return templates.TemplateResponse(request, "contatos.html", {"contatos": contatos})
