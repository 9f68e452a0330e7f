"""Identifier derivation from free-form display names.

Turns user text such as ``"My Clock"`` into the package, file-stem, exported
and variable forms used by the templates and the layout patches. Every
function here is pure: the same input always yields the same output.
"""

from __future__ import annotations

import re

from fastdash.errors import ValidationError

from .models import FeatureKind, IdentifierSet


# Suffix appended to the camelCase variable name per feature kind.
VARIABLE_SUFFIXES: dict[FeatureKind, str] = {
    FeatureKind.MODULE: "View",
    FeatureKind.WIDGET: "Widget",
    FeatureKind.SERVICE: "Service",
    FeatureKind.MODEL: "Model",
}

_WORD_SPLIT_RE = re.compile(r"[-_\s]+")


def to_package_name(raw: str) -> str:
    """Lower-case, drop whitespace, keep only ``[a-z0-9._-]``.

    E.g. ``'My Dashboard!'`` -> ``'mydashboard'``.
    """
    lowered = re.sub(r"\s+", "", raw.lower())
    return re.sub(r"[^a-z0-9._-]", "", lowered)


def to_file_stem(raw: str) -> str:
    """Convert text to a snake-case file stem.

    E.g. ``'Weather-Info Box'`` -> ``'weather_info_box'``.
    """
    stem = re.sub(r"[ -]", "_", raw.lower())
    return re.sub(r"[^a-z0-9_]", "", stem)


def to_exported_name(raw: str) -> str:
    """Convert text to a PascalCase exported identifier.

    Words are split on ``-``, ``_`` and whitespace in the original text; only
    the first character of each word is changed.
    E.g. ``'my clock'`` -> ``'MyClock'``, ``'user-ID'`` -> ``'UserID'``.
    """
    words = (re.sub(r"[^a-zA-Z0-9]", "", w) for w in _WORD_SPLIT_RE.split(raw))
    return "".join(w[0].upper() + w[1:] for w in words if w)


def to_variable_name(exported: str, suffix: str = "") -> str:
    """Lower-case the first character of *exported* and append *suffix*."""
    if not exported:
        return ""
    return exported[0].lower() + exported[1:] + suffix


def derive_identifiers(raw: str, kind: FeatureKind) -> IdentifierSet:
    """Derive the full :class:`IdentifierSet` for a feature display name.

    Raises:
        ValidationError: If any form sanitizes to an empty string, or the
            exported name would start with a digit.
    """
    package_name = to_package_name(raw)
    file_stem = to_file_stem(raw)
    exported_name = to_exported_name(raw)
    variable_name = to_variable_name(exported_name, VARIABLE_SUFFIXES[kind])

    forms = {
        "package": package_name,
        "file": file_stem,
        "exported": exported_name,
        "variable": variable_name,
    }
    empty = [label for label, value in forms.items() if not value]
    if empty:
        raise ValidationError(
            raw,
            f"{kind.value.capitalize()} name {raw!r} is empty or invalid "
            f"(empty {', '.join(empty)} name). Use letters or digits.",
        )
    if exported_name[0].isdigit():
        raise ValidationError(
            raw,
            f"{kind.value.capitalize()} name {raw!r} must not start with a digit.",
        )

    return IdentifierSet(
        package_name=package_name,
        file_stem=file_stem,
        exported_name=exported_name,
        variable_name=variable_name,
    )


def derive_module_name(raw: str) -> str:
    """Derive the project module name (package form only).

    Raises:
        ValidationError: If the sanitized name is empty.
    """
    module_name = to_package_name(raw)
    if not module_name:
        raise ValidationError(
            raw,
            f"Sanitized project name for {raw!r} is empty. "
            "Please use a name with alphanumeric characters.",
        )
    return module_name
