from __future__ import annotations

import logging
from typing import List, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.orm import Session

from realty_api.core.errors import EntityNotFoundError, ReferentialIntegrityError
from realty_api.models import Realtor, Realty, Sale

LOGGER = logging.getLogger(__name__)

M = TypeVar("M", Realtor, Realty, Sale)


def list_entities(db: Session, model: Type[M]) -> List[M]:
    return db.query(model).order_by(model.id).all()


def get_entity(db: Session, model: Type[M], entity_id: int) -> M:
    obj = db.get(model, entity_id)
    if obj is None:
        raise EntityNotFoundError(f"{model.__name__} {entity_id} not found")
    return obj


def _check_sale_refs(db: Session, payload: BaseModel) -> None:
    # every sale must point at an existing realty object and realtor
    if db.get(Realty, payload.realty_object_id) is None:
        raise ReferentialIntegrityError(f"Realty {payload.realty_object_id} does not exist")
    if db.get(Realtor, payload.realtor_id) is None:
        raise ReferentialIntegrityError(f"Realtor {payload.realtor_id} does not exist")


def create_entity(db: Session, model: Type[M], payload: BaseModel) -> M:
    if model is Sale:
        _check_sale_refs(db, payload)
    obj = model(**payload.model_dump())
    db.add(obj)
    db.commit()
    db.refresh(obj)
    LOGGER.info("created %s %s", model.__name__, obj.id)
    return obj


def update_entity(db: Session, model: Type[M], entity_id: int, payload: BaseModel) -> M:
    obj = get_entity(db, model, entity_id)
    if model is Sale:
        _check_sale_refs(db, payload)
    for field, value in payload.model_dump().items():
        setattr(obj, field, value)
    db.commit()
    LOGGER.info("updated %s %s", model.__name__, entity_id)
    return obj


def delete_entity(db: Session, model: Type[M], entity_id: int) -> None:
    obj = get_entity(db, model, entity_id)
    # realtors and realty objects cannot go while sales still reference them
    if model is not Sale and obj.sales:
        raise ReferentialIntegrityError(
            f"{model.__name__} {entity_id} is referenced by {len(obj.sales)} sale(s)",
            status_code=409,
        )
    db.delete(obj)
    db.commit()
    LOGGER.info("deleted %s %s", model.__name__, entity_id)
