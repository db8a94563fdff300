"""Data models for the YUVI Paste API."""

from yuvi_paste.models.account import Account, Session
from yuvi_paste.models.api_key import ApiKey, IssuedApiKey
from yuvi_paste.models.paste import Paste

__all__ = ["Account", "Session", "ApiKey", "IssuedApiKey", "Paste"]
