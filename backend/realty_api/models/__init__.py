from .realtor import Realtor
from .realty import Realty
from .sale import Sale

__all__ = [
    "Realtor",
    "Realty",
    "Sale",
]
