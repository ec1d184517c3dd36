import html
import re

# ASCII control characters except newline
CONTROL_CHARACTERS = re.compile(r"[\x00-\x09\x0b-\x1f\x7f]")


def sanitize_text(value: str) -> str:
    """Strip control characters and escape HTML so the text is safe inside an email body."""
    return html.escape(CONTROL_CHARACTERS.sub("", value)).strip()
