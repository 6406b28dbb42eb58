"""Custom exceptions for Prompt Arena.

The core only rejects malformed configuration. Empty inputs are not errors:
an empty candidate set simply produces an empty slate.
"""

from __future__ import annotations


class PromptArenaError(Exception):
    """Base exception for all Prompt Arena errors."""

    pass


class ConfigurationInvalid(PromptArenaError):
    """Invalid bandit configuration, K-factor or slate size.

    Raised at the admin boundary when a form or update is rejected, and by
    the core when it is handed a value that upstream validation should have
    caught. The core never clamps a bad value into range.
    """

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        self.user_message = message
        full_message = message
        if field:
            full_message = f"Invalid configuration for '{field}': {message}"
        super().__init__(full_message)


class DictionaryError(PromptArenaError):
    """Error operating on a community word dictionary.

    Raised when an event references a word the dictionary does not hold.
    """

    def __init__(self, message: str, community: str | None = None):
        self.community = community
        full_message = message
        if community:
            full_message = f"Dictionary '{community}': {message}"
        super().__init__(full_message)
