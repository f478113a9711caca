import hashlib
import re
import unicodedata


def _normalize(value: str | int) -> str:
    # Fold accents so "Cien años" and "Cien anos" share an id
    s = unicodedata.normalize("NFKD", str(value)).encode("ascii", "ignore").decode()
    return re.sub(r"[^a-z0-9]", "", s.lower())


def make_id(*parts: str | int) -> int:
    """Deterministic 60-bit id from the given parts (books, daily progress rows).

    The whole normalized text is hashed, so titles that only differ after a
    long shared prefix still get different ids.
    """
    key = ":".join(_normalize(p) for p in parts)
    return int(hashlib.sha256(key.encode()).hexdigest()[:15], 16)
