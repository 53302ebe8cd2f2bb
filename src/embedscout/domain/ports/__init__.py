from .decryptor import DecryptorPort
from .html_document import HtmlDocumentPort

__all__ = [
    "DecryptorPort",
    "HtmlDocumentPort",
]
