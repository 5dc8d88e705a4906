"""
Pretty-prints the generated SCSS and repairs what the beautifier breaks.
"""
import dataclasses
import re

import cssbeautifier

from ..utils.config import FormatterOptions

APPLY_STATEMENT_RE = re.compile(r'@apply\s[^;{}]*;')
# the beautifier treats `hover:bg-white` as `property: value`
VARIANT_SPACE_RE = re.compile(r':\s+')
WHITESPACE_RE = re.compile(r'\s+')
# a region marker pulled up onto the end of the previous line
JOINED_MARKER_RE = re.compile(r'^([ \t]*)(.*\S)[ \t]*(// #(?:end)?region\b.*)$', re.MULTILINE)


def _fix_apply_statement(match: re.Match) -> str:
    statement = VARIANT_SPACE_RE.sub(':', match.group(0))
    statement = WHITESPACE_RE.sub(' ', statement)
    return statement.replace(' ;', ';')


def fix_apply_directives(text: str) -> str:
    """
    Restores `@apply a b:c;` spacing inside every @apply statement.
    Text outside @apply statements is left untouched.
    """
    return APPLY_STATEMENT_RE.sub(_fix_apply_statement, text)


def fix_region_markers(text: str) -> str:
    """Moves `// #region` and `// #endregion` markers back onto their own lines."""
    count = 1
    while count:
        text, count = JOINED_MARKER_RE.subn(r'\1\2\n\1\3', text)
    return text


def beautifier_options(options: FormatterOptions):
    """Translates FormatterOptions into cssbeautifier options."""
    opts = cssbeautifier.default_options()
    for name, value in dataclasses.asdict(options).items():
        setattr(opts, name, value)
    return opts


def format_sass(text: str, options: FormatterOptions | None = None) -> str:
    """Beautifies raw SCSS, then fixes @apply statements and region markers."""
    formatted = cssbeautifier.beautify(text, beautifier_options(options or FormatterOptions()))
    return fix_region_markers(fix_apply_directives(formatted))
