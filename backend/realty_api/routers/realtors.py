from typing import List

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from realty_api.db.db_connection import get_db
from realty_api.models import Realtor
from realty_api.schemas.realtor import RealtorIn, RealtorOut
from realty_api.services import crud

router = APIRouter(
    prefix="/api/Realtor",
    tags=["realtors"]
)

@router.get("", response_model=List[RealtorOut])
def get_realtors(db: Session = Depends(get_db)):
    return crud.list_entities(db, Realtor)

@router.get("/{realtor_id}", response_model=RealtorOut)
def get_realtor(realtor_id: int, db: Session = Depends(get_db)):
    return crud.get_entity(db, Realtor, realtor_id)

@router.post("", response_model=RealtorOut, status_code=201)
def add_realtor(payload: RealtorIn, request: Request, response: Response, db: Session = Depends(get_db)):
    obj = crud.create_entity(db, Realtor, payload)
    response.headers["Location"] = str(request.url_for("get_realtor", realtor_id=obj.id))
    return obj

@router.put("/{realtor_id}", status_code=204, response_class=Response)
def update_realtor(realtor_id: int, payload: RealtorIn, db: Session = Depends(get_db)):
    crud.update_entity(db, Realtor, realtor_id, payload)
    return Response(status_code=204)

@router.delete("/{realtor_id}", status_code=204, response_class=Response)
def delete_realtor(realtor_id: int, db: Session = Depends(get_db)):
    """
    Realtors that still have sales are refused with 409.
    """
    crud.delete_entity(db, Realtor, realtor_id)
    return Response(status_code=204)
