"""
Removes credentials from request dumps before they are logged.
"""
import logging
import re
from typing import Optional

AUTH_HEADER_PATTERN = r"Authorization: (\w+) [\w-]+"
AUTH_HEADER_REPLACEMENT = r"Authorization: \1 *********"


class AuthReplacer:
    """
    Replaces the credentials of `Authorization` headers with stars.

    The auth scheme (Bearer, Basic, ...) is kept so the dump stays readable.

    Example:
        ar = create_auth_replacer()
        ar.replace_string("Authorization: Bearer 31e675cc-8ac7")
        # "Authorization: Bearer *********"
    """

    def __init__(
        self,
        pattern: Optional[re.Pattern[str]] = None,
        replacement: str = AUTH_HEADER_REPLACEMENT,
    ) -> None:
        self._pattern = pattern or re.compile(AUTH_HEADER_PATTERN, re.ASCII)
        self._replacement = replacement

    def replace_string(self, body: str) -> str:
        """Return body with every authorization header masked."""
        return self._pattern.sub(self._replacement, body)


def create_auth_replacer() -> AuthReplacer:
    """Create an AuthReplacer for the default Authorization header format."""
    return AuthReplacer()


class ConcealFilter(logging.Filter):
    """
    Logging filter that masks credentials in every record's message.

    The formatted traceback (exc_text) and stack_info are masked too. Values
    passed through `extra=` are not touched; keep credentials out of them.

    Example:
        handler.addFilter(ConcealFilter())
    """

    _formatter = logging.Formatter()

    def __init__(self, name: str = "", replacer: Optional[AuthReplacer] = None) -> None:
        super().__init__(name)
        self.replacer = replacer or create_auth_replacer()

    def filter(self, record: logging.LogRecord) -> bool:
        if not super().filter(record):
            return False
        message = record.getMessage()
        concealed = self.replacer.replace_string(message)
        if concealed != message:
            record.msg = concealed
            record.args = None

        if record.exc_info and not record.exc_text:
            record.exc_text = self._formatter.formatException(record.exc_info)
        if record.exc_text:
            record.exc_text = self.replacer.replace_string(record.exc_text)
        if record.stack_info:
            record.stack_info = self.replacer.replace_string(record.stack_info)
        return True
