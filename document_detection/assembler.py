from typing import Iterable, List

from .document import ScannedDocument


def reading_order_key(document: ScannedDocument):
    tl = document.top_left
    return (-document.confidence, float(tl[0] + tl[1]))


def order_documents(documents: Iterable[ScannedDocument]) -> List[ScannedDocument]:
    """
    Sort by confidence (highest first), then by x+y of the top-left corner
    so equally confident documents read left-to-right, top-to-bottom.
    """
    return sorted(documents, key=reading_order_key)
