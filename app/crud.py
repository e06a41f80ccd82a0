# app/crud.py
"""CRUD operations for contacts - pure data access layer."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models import Contact
from app.schemas import ContactCreate


def create_contact(session: Session, data: ContactCreate) -> Contact:
    """Create a new contact."""
    contact = Contact(
        name=data.name,
        email=data.email,
        phone=data.phone,
    )
    session.add(contact)
    session.flush()
    return contact


def list_contacts(session: Session) -> list[Contact]:
    """List every stored contact, oldest first."""
    stmt = select(Contact).order_by(Contact.id)
    return list(session.execute(stmt).scalars().all())
