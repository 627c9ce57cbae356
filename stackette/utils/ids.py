from __future__ import annotations

"""stackette.utils.ids
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Tiny helpers for consistent identifier formatting.

:func:`logical_id` turns a construct path into the identifier used in
rendered templates, :func:`snake_case` is used for file names and
:func:`pascal_case` for template property keys.
"""

import hashlib
import re
from typing import Sequence

__all__ = ["snake_case", "logical_id", "pascal_case"]

_PATTERN = re.compile(r"[^a-zA-Z0-9]+")

# Path components that never contribute to the human readable part.
_HIDDEN = {"Default"}
_HIDDEN_LAST = {"Resource"}


def snake_case(text: str) -> str:  # noqa: D401
    """Return *text* converted to ``snake_case``.

    * non‑alphanumeric chars become ``_``
    * multiple underscores are squeezed
    * leading/trailing underscores are stripped
    * everything lower‑cased
    """

    s = _PATTERN.sub("_", text)
    s = re.sub(r"_+", "_", s)
    return s.strip("_").lower()


def pascal_case(key: str) -> str:
    """Upper-case the first letter of a camelCase *key* (``subnetIds`` → ``SubnetIds``)."""
    return key[:1].upper() + key[1:]


def logical_id(components: Sequence[str]) -> str:
    """Return a template-safe identifier for a construct path.

    A single component is used verbatim (minus non-alphanumerics).  Deeper
    paths get the concatenated components followed by an 8 char hash of
    the full path, so ``Cache/SubnetGroup`` and ``CacheSubnet/Group`` never
    collide.
    """
    if not components:
        raise ValueError("Cannot allocate a logical id for an empty path")

    if len(components) == 1:
        ident = _PATTERN.sub("", components[0])
        if not ident:
            raise ValueError(f"Construct id '{components[0]}' has no alphanumeric characters")
        return ident

    human_parts = [c for c in components if c not in _HIDDEN]
    if human_parts and human_parts[-1] in _HIDDEN_LAST:
        human_parts = human_parts[:-1]
    human = "".join(_PATTERN.sub("", c) for c in human_parts)

    digest = hashlib.md5("/".join(components).encode("utf-8")).hexdigest()[:8].upper()
    return f"{human[:240]}{digest}"
