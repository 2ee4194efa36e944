"""
BIZDESK - Error Taxonomy
========================
Every error carries a message that can be shown to the user as-is.
"""

from typing import List, Optional


class BizdeskError(Exception):
    """Base class. `message` is a display string."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(BizdeskError):
    """Supabase URL/key or credentials are missing"""


class NotAuthenticated(BizdeskError):
    """An operation was attempted without a signed-in user"""


class AuthenticationFailed(BizdeskError):
    """Sign-in was rejected by the backend"""


class FormValidationError(BizdeskError):
    """A form was submitted with missing or malformed fields"""

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.fields = fields or []


class ActionNotOffered(BizdeskError):
    """A task menu action was invoked for a status that does not offer it"""
