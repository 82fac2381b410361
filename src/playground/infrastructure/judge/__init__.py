"""
Remote Judge Infrastructure
"""

from .catalog import LanguageCatalog, pick_language_id
from .client import JudgeClient, decode_field, encode_text

__all__ = ["JudgeClient", "LanguageCatalog", "pick_language_id", "decode_field", "encode_text"]
