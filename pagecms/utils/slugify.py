import re
from unidecode import unidecode


def slugify(text: str | None, separator: str = "-") -> str:
    if not text:
        return ""
    text = unidecode(text).lower()
    text = re.sub(r'[^a-z0-9]+', separator, text).strip(separator)
    return text
