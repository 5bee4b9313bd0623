"""Text parsing utilities for consistent text processing across the application."""

import re
import unicodedata
from typing import Optional


class TextParser:
    """
    Centralized text helpers for word fields.
    
    Everything that is written to a store passes through normalize_unicode
    so the same word never exists twice in NFC and NFD spellings.
    """
    
    # Whitespace normalization pattern
    WHITESPACE_PATTERN = re.compile(r'\s+')
    
    # CamelCase boundary, used for enum labels ("AuxiliaryVerb" -> "Auxiliary Verb")
    CAMEL_BOUNDARY_PATTERN = re.compile(r'(?<!^)([A-Z])')
    
    @classmethod
    def normalize_unicode(cls, text: str) -> str:
        """
        Normalize text to NFC form for consistent Unicode handling.
        
        Args:
            text: Input text
            
        Returns:
            NFC-normalized text
        """
        if not text:
            return ""
        return unicodedata.normalize('NFC', str(text))
    
    @classmethod
    def normalize_optional(cls, text: Optional[str]) -> Optional[str]:
        """Normalize text, keeping None and empty strings as None."""
        if text is None or str(text) == "":
            return None
        return cls.normalize_unicode(text)
    
    @classmethod
    def collapse_whitespace(cls, text: str) -> str:
        """Collapse runs of whitespace into single spaces."""
        if not text:
            return ""
        return cls.WHITESPACE_PATTERN.sub(' ', str(text)).strip()
    
    @classmethod
    def split_camel_case(cls, text: str) -> str:
        """Turn a CamelCase identifier into space separated words."""
        return cls.CAMEL_BOUNDARY_PATTERN.sub(r' \1', text)
    
    @classmethod
    def truncate(cls, text: str, max_length: int = 80) -> str:
        """Truncate text for list display, adding an ellipsis."""
        text = cls.collapse_whitespace(text)
        if len(text) <= max_length:
            return text
        return text[:max_length - 1].rstrip() + "…"
