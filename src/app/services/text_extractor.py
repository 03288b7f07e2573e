from abc import ABC, abstractmethod
from typing import List

from pydantic import BaseModel


class TextExtractionError(Exception):
    """No text could be extracted from a document"""


class ExtractedText(BaseModel):
    text: str
    method: str
    word_count: int
    warnings: List[str] = []

    @property
    def length(self) -> int:
        return len(self.text)


class ITextExtractor(ABC):
    """Turns an uploaded document into plain text"""

    @abstractmethod
    def extract(self, data: bytes, content_type: str, filename: str) -> ExtractedText:
        """Extract text; raises TextExtractionError when nothing usable is found"""
        pass
