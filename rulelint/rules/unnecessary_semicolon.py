# Unnecessary semicolon detection: flags lines terminated by a semicolon.

from __future__ import annotations

from rulelint.rules.base import Rule

# ^\s*\*.*   any line starting with optional whitespace and a *
# ^\*.*      any line starting with a *
# /\*.*      any line starting with the /* sequence
# .*//.*     any line containing the // sequence
# .*\*/.*    any line containing the */ sequence
COMMENT_LINE_PATTERN = r"^\s*\*.*|^\*.*|/\*.*|.*//.*|.*\*/.*"


class UnnecessarySemicolonRule(Rule):
    """
    Reports lines terminated by a semicolon.

    Purely textual: every trimmed line ending in ';' is reported unless it
    looks like a comment. Java requires those semicolons, so on ordinary Java
    sources this flags nearly every statement; it is meant for codebases that
    treat trailing semicolons as optional and can be turned off with
    `--disable UnnecessarySemicolon`.

    Suppress with @SuppressWarnings("UnnecessarySemicolon") on a type or
    member, or on the package declaration / a leading
    `// rulelint: suppress UnnecessarySemicolon` comment for the whole file.
    """

    id = "UnnecessarySemicolon"
    name = "Unnecessary semicolon"
    priority = 3
    message = "Semi-colons as line endings can be removed safely"
    line_match = r";\Z"
    exclude_pattern = COMMENT_LINE_PATTERN
