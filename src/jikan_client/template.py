"""Endpoint template resolution.

Endpoint templates are path strings with named ``{placeholder}`` markers,
e.g. ``/anime/{id}/episodes/{episode}``. :func:`resolve_path` substitutes
concrete values for them and rejects parameters the template does not
declare.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

from jikan_client.exceptions import ValidationError

_PLACEHOLDER_RE = re.compile(r"\{([^{}]+)\}")


def template_placeholders(template: str) -> list[str]:
    """Return the placeholder names in *template* in order of appearance.

    Example::

        >>> template_placeholders("/users/{id}/posts/{post_id}")
        ['id', 'post_id']
    """
    return _PLACEHOLDER_RE.findall(template)


def resolve_path(template: str, params: Mapping[str, Any]) -> str:
    """Substitute *params* into the placeholders of *template*.

    Every key is checked against the original template before anything is
    substituted: if ``{key}`` does not occur in it,
    :class:`~jikan_client.exceptions.ValidationError` is raised naming that
    key. Only the first occurrence of each placeholder is
    replaced, with ``str(value)``. Placeholders with no matching key are
    left untouched.

    Args:
        template: The endpoint path template.
        params: Placeholder name to value.

    Returns:
        The resolved path.

    Raises:
        ValidationError: If a key in *params* has no placeholder.
    """
    for name in params:
        if f"{{{name}}}" not in template:
            raise ValidationError(name)

    pending = dict(params)

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in pending:
            return match.group(0)
        return str(pending.pop(name))

    return _PLACEHOLDER_RE.sub(_substitute, template)
