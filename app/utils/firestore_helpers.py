"""
Firestore query helpers.

NOTE: firebase_admin still accepts positional where() arguments. Newer
google-cloud-firestore releases log a deprecation warning for them; the
functionality is unchanged, so every query goes through this helper to
keep the call site in one place.
"""

from typing import Any, Dict


def where_filter(query, field_path: str, op_string: str, value):
    """
    Usage:
        query = where_filter(collection, "token", "==", token)
        query = where_filter(query, "created_at", "<", end)
    """
    return query.where(field_path, op_string, value)


def snapshot_to_dict(doc) -> Dict[str, Any]:
    """Document data plus its ID under "id"."""
    data = doc.to_dict() or {}
    data["id"] = doc.id
    return data
