from fastapi import Depends
from sqlmodel import Session

from pocketbook.database import get_session
from pocketbook.services.store import TransactionStore


def get_store(session: Session = Depends(get_session)) -> TransactionStore:
    return TransactionStore(session)
