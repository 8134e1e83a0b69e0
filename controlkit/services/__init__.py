
from .analytics import track_generation
from .token_utils import create_pdf_token, decode_pdf_token

__all__ = [
    "track_generation",
    "create_pdf_token",
    "decode_pdf_token",
]
