"""
Identifier and value validation for shortcut synthesis.

Pure predicates deciding whether text coming from shortcuts.conf or
editor.conf may be turned into a command. Every shortcut passes through these
before a handler is generated for it.
"""

import re

_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

# Parent-directory traversal forms
_TRAVERSAL_SEQUENCES = ("../", "/..")

# Shell expansion forms; '$' alone covers '$(' and '${'
_PATH_EXPANSION_CHARS = ("$", "`")

# Substitution, piping, redirection and chaining
_UNSAFE_COMMAND_TOKENS = ("`", "$(", "$[", "|", ">", "<", "&&", ";")

_CONTROL_CHARS = ("\x00", "\n", "\r")


def is_valid_identifier(name: str) -> bool:
    """Return True if ``name`` is a letter or underscore followed by letters, digits or underscores.

    Examples:
        >>> is_valid_identifier("proj")
        True
        >>> is_valid_identifier("2fast")
        False
        >>> is_valid_identifier("a;b")
        False
    """
    if not isinstance(name, str):
        return False
    return _IDENTIFIER_RE.fullmatch(name) is not None


def is_safe_path(value: str) -> bool:
    """Return True if ``value`` may be used as a navigation shortcut target.

    Rejects traversal (``../``, ``/..``), shell expansion (``$``, backticks),
    control characters, and every ``~`` form except ``~/<sub-path>``.

    Examples:
        >>> is_safe_path("~/projects")
        True
        >>> is_safe_path("../etc/passwd")
        False
        >>> is_safe_path("~otheruser/x")
        False
    """
    if not isinstance(value, str) or not value:
        return False

    if value == ".." or any(seq in value for seq in _TRAVERSAL_SEQUENCES):
        return False

    if any(ch in value for ch in _PATH_EXPANSION_CHARS + _CONTROL_CHARS):
        return False

    # Only the current user's home with a sub-path: reject bare ~ and ~user
    if value.startswith("~") and not value.startswith("~/"):
        return False

    return True


def is_safe_command_string(value: str) -> bool:
    """Return True if ``value`` is a plain program invocation such as ``open -a Zed``.

    Multi-word invocations are fine; substitution, pipes, redirection and
    command chaining are not.

    Examples:
        >>> is_safe_command_string("open -a Zed")
        True
        >>> is_safe_command_string("cat file | sh")
        False
    """
    if not isinstance(value, str) or not value.strip():
        return False

    if any(ch in value for ch in _CONTROL_CHARS):
        return False

    return not any(token in value for token in _UNSAFE_COMMAND_TOKENS)
