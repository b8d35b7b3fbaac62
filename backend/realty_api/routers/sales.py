from typing import List

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from realty_api.db.db_connection import get_db
from realty_api.models import Sale
from realty_api.schemas.sale import SaleIn, SaleOut
from realty_api.services import crud

router = APIRouter(
    prefix="/api/Sale",
    tags=["sales"]
)

@router.get("", response_model=List[SaleOut])
def get_sales(db: Session = Depends(get_db)):
    return crud.list_entities(db, Sale)

@router.get("/{sale_id}", response_model=SaleOut)
def get_sale(sale_id: int, db: Session = Depends(get_db)):
    return crud.get_entity(db, Sale, sale_id)

@router.post("", response_model=SaleOut, status_code=201)
def add_sale(payload: SaleIn, request: Request, response: Response, db: Session = Depends(get_db)):
    """
    realty_object_id / realtor_id must reference existing rows, otherwise 400.
    """
    obj = crud.create_entity(db, Sale, payload)
    response.headers["Location"] = str(request.url_for("get_sale", sale_id=obj.id))
    return obj

@router.put("/{sale_id}", status_code=204, response_class=Response)
def update_sale(sale_id: int, payload: SaleIn, db: Session = Depends(get_db)):
    crud.update_entity(db, Sale, sale_id, payload)
    return Response(status_code=204)

@router.delete("/{sale_id}", status_code=204, response_class=Response)
def delete_sale(sale_id: int, db: Session = Depends(get_db)):
    crud.delete_entity(db, Sale, sale_id)
    return Response(status_code=204)
