"""
Admin list filtering and sorting.

Items are API records (camelCase dicts).  Filters apply in order: search,
category, status, tag; then one sort.  ``"All"``, ``""`` and ``None`` mean
no filter for that field.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

ALL = "All"
DEFAULT_PROJECT_CATEGORY = "Other"
DEFAULT_POST_CATEGORY = "General"


def _active(value: Optional[str]) -> bool:
    return bool(value) and value != ALL


def _timestamp(value: Any) -> float:
    """Sortable number from a datetime or ISO string; missing values sort last."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return 0.0
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp()
    return 0.0


def _contains(term: str, *fields: Any) -> bool:
    return any(term in str(field or "").lower() for field in fields)


# ---------------------------------------------------------------------------
# Derived admin fields
# ---------------------------------------------------------------------------

def admin_project_view(project: Dict[str, Any]) -> Dict[str, Any]:
    """Adds ``category`` (first tag or "Other") and ``status`` ("active")."""
    tags = project.get("tags") or []
    return dict(
        project,
        tags=tags,
        category=tags[0] if tags else DEFAULT_PROJECT_CATEGORY,
        status="active",
    )


def admin_post_view(post: Dict[str, Any]) -> Dict[str, Any]:
    """Adds ``status`` ("published"/"draft") and ``category`` (first tag or "General")."""
    tags = post.get("tags") or []
    return dict(
        post,
        tags=tags,
        status="published" if post.get("published") else "draft",
        category=tags[0] if tags else DEFAULT_POST_CATEGORY,
    )


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

def filter_projects(
    items: Iterable[Dict[str, Any]],
    search: str = "",
    category: Optional[str] = ALL,
    status: Optional[str] = ALL,
    tag: Optional[str] = ALL,
    sort_by: str = "order",
) -> List[Dict[str, Any]]:
    """
    Sort keys: ``title`` (A-Z), ``created`` / ``updated`` (newest first),
    ``views`` (most first); anything else sorts by display ``order``.
    """
    result = [admin_project_view(p) for p in items]

    if search:
        term = search.lower()
        result = [
            p for p in result
            if _contains(term, p.get("title"), p.get("description"))
            or any(term in t.lower() for t in p["tags"])
        ]
    if _active(category):
        result = [p for p in result if p["category"] == category]
    if _active(status):
        result = [p for p in result if p["status"] == status.lower()]
    if _active(tag):
        result = [p for p in result if tag in p["tags"]]

    if sort_by == "title":
        result.sort(key=lambda p: (p.get("title") or "").lower())
    elif sort_by == "created":
        result.sort(key=lambda p: _timestamp(p.get("createdAt")), reverse=True)
    elif sort_by == "updated":
        result.sort(key=lambda p: _timestamp(p.get("updatedAt")), reverse=True)
    elif sort_by == "views":
        result.sort(key=lambda p: p.get("views") or 0, reverse=True)
    else:
        result.sort(key=lambda p: p.get("order") or 0)
    return result


def filter_posts(
    items: Iterable[Dict[str, Any]],
    search: str = "",
    category: Optional[str] = ALL,
    status: Optional[str] = ALL,
    tag: Optional[str] = ALL,
    sort_by: str = "updated",
) -> List[Dict[str, Any]]:
    """
    Sort keys: ``title``, ``created``, ``published`` (publish date, falling
    back to creation), ``views``, ``likes``; default ``updated``.
    """
    result = [admin_post_view(p) for p in items]

    if search:
        term = search.lower()
        result = [
            p for p in result
            if _contains(term, p.get("title"), p.get("excerpt"), p.get("content"))
            or any(term in t.lower() for t in p["tags"])
        ]
    if _active(category):
        result = [p for p in result if p["category"] == category]
    if _active(status):
        result = [p for p in result if p["status"] == status.lower()]
    if _active(tag):
        result = [p for p in result if tag in p["tags"]]

    if sort_by == "title":
        result.sort(key=lambda p: (p.get("title") or "").lower())
    elif sort_by == "created":
        result.sort(key=lambda p: _timestamp(p.get("createdAt")), reverse=True)
    elif sort_by == "published":
        result.sort(
            key=lambda p: _timestamp(p.get("publishedAt") or p.get("createdAt")),
            reverse=True,
        )
    elif sort_by == "views":
        result.sort(key=lambda p: p.get("views") or 0, reverse=True)
    elif sort_by == "likes":
        result.sort(key=lambda p: p.get("likes") or 0, reverse=True)
    else:
        result.sort(key=lambda p: _timestamp(p.get("updatedAt")), reverse=True)
    return result


def filter_comments(
    items: Iterable[Dict[str, Any]],
    search: str = "",
    kind: str = "all",
) -> List[Dict[str, Any]]:
    """``kind`` is ``all``, ``project`` or ``post``; search matches content, author and parent title."""
    result = list(items)

    if kind == "project":
        result = [c for c in result if c.get("projectId")]
    elif kind == "post":
        result = [c for c in result if c.get("postId")]

    if search:
        term = search.lower()
        result = [
            c for c in result
            if _contains(
                term,
                c.get("content"),
                c.get("author"),
                (c.get("project") or {}).get("title"),
                (c.get("post") or {}).get("title"),
            )
        ]
    return result
