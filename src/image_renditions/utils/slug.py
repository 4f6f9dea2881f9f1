import re
import unicodedata

_NON_WORD = re.compile(r"[^A-Za-z0-9]+")


def slugify(text: str, separator: str = "-") -> str:
    """ASCII slug of ``text``, e.g. ``"Écharpe rouge (1)"`` -> ``"Echarpe-rouge-1"``."""
    ascii_text = (
        unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    )
    slug = _NON_WORD.sub(separator, ascii_text).strip(separator)
    return slug or "file"
