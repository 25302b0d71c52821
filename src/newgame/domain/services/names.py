MAX_NAME_LENGTH = 30
_NAME_PUNCTUATION = set(" -_.'")


def is_good_name(name: str | None, blank_ok: bool = False) -> bool:
    """Names double as save file names, so only a conservative character set is allowed."""
    text = str(name or "")
    if not text.strip():
        return blank_ok
    if text != text.strip() or len(text) > MAX_NAME_LENGTH:
        return False
    if text in {".", ".."}:
        return False
    return all(ch.isalnum() or ch in _NAME_PUNCTUATION for ch in text)
