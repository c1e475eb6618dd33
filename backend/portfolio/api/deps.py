"""
Shared route dependencies
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from portfolio.core.database import get_db
from portfolio.services.storage import StorageService


def get_storage(db: Session = Depends(get_db)) -> StorageService:
    return StorageService(db)
