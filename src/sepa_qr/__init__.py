from pydantic_models.data.sepa_transfer_payload import CharacterSet

from .data import SepaQrData, format_money
from .exceptions import InvalidField, MissingField, SepaQrError

__all__ = [
    "CharacterSet",
    "InvalidField",
    "MissingField",
    "SepaQrData",
    "SepaQrError",
    "format_money",
]
