import re

WHITESPACE_RE = re.compile(r'\s+')
COMMENT_DELIMITERS_RE = re.compile(r'<!--|-->')


def clean_text(text: str | None, is_comment: bool = False) -> str | None:
    """
    Collapses all whitespace runs (newlines included) to single spaces and trims.
    With `is_comment`, HTML comment delimiters are stripped as well.
    Returns None when nothing is left.
    """
    if not text:
        return None
    if is_comment:
        text = COMMENT_DELIMITERS_RE.sub('', text)
    text = WHITESPACE_RE.sub(' ', text).strip()
    return text or None


def add_missing_suffix(text: str, suffix: str) -> str:
    """Appends `suffix` unless the text already ends with it."""
    return text if text.endswith(suffix) else text + suffix
