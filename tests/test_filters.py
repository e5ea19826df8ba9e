"""Tests for admin list filtering and sorting."""
from app.client.filters import filter_comments, filter_posts, filter_projects

PROJECTS = [
    {"id": "1", "title": "Beta", "description": "Sales dashboard", "tags": ["Python"], "order": 2,
     "createdAt": "2024-01-01T00:00:00Z", "views": 5},
    {"id": "2", "title": "alpha", "description": "Churn model", "tags": ["ML", "Python"], "order": 1,
     "createdAt": "2024-03-01T00:00:00Z", "views": 9},
    {"id": "3", "title": "Gamma", "description": "Untagged", "tags": [], "order": 3,
     "createdAt": "2023-06-01T00:00:00Z"},
]

POSTS = [
    {"id": "a", "title": "Draft ideas", "content": "...", "tags": [], "published": False,
     "createdAt": "2024-05-01T00:00:00Z", "updatedAt": "2024-05-02T00:00:00Z", "likes": 1},
    {"id": "b", "title": "Release notes", "content": "pandas tips", "tags": ["Python"], "published": True,
     "createdAt": "2024-01-01T00:00:00Z", "updatedAt": "2024-06-01T00:00:00Z", "likes": 8},
]


def test_projects_default_order():
    assert [p["id"] for p in filter_projects(PROJECTS)] == ["2", "1", "3"]


def test_projects_derived_category():
    result = {p["id"]: p["category"] for p in filter_projects(PROJECTS)}
    assert result == {"1": "Python", "2": "ML", "3": "Other"}


def test_projects_search_matches_tags_and_text():
    assert [p["id"] for p in filter_projects(PROJECTS, search="churn")] == ["2"]
    assert [p["id"] for p in filter_projects(PROJECTS, search="python")] == ["2", "1"]


def test_projects_category_tag_and_sort():
    assert [p["id"] for p in filter_projects(PROJECTS, category="Other")] == ["3"]
    assert [p["id"] for p in filter_projects(PROJECTS, tag="Python", sort_by="title")] == ["2", "1"]
    assert [p["id"] for p in filter_projects(PROJECTS, sort_by="created")] == ["2", "1", "3"]
    assert [p["id"] for p in filter_projects(PROJECTS, sort_by="views")] == ["2", "1", "3"]


def test_posts_status_and_category():
    assert [p["id"] for p in filter_posts(POSTS, status="draft")] == ["a"]
    assert [p["id"] for p in filter_posts(POSTS, category="General")] == ["a"]
    assert [p["id"] for p in filter_posts(POSTS, search="pandas")] == ["b"]


def test_posts_sorting():
    assert [p["id"] for p in filter_posts(POSTS)] == ["b", "a"]
    assert [p["id"] for p in filter_posts(POSTS, sort_by="created")] == ["a", "b"]
    assert [p["id"] for p in filter_posts(POSTS, sort_by="likes")] == ["b", "a"]


def test_comments_kind_and_search():
    comments = [
        {"content": "Nice", "author": "Sam", "projectId": "1", "project": {"title": "Beta"}},
        {"content": "Typo here", "author": "Kim", "postId": "b", "post": {"title": "Release notes"}},
    ]
    assert [c["author"] for c in filter_comments(comments, kind="post")] == ["Kim"]
    assert [c["author"] for c in filter_comments(comments, search="beta")] == ["Sam"]
    assert len(filter_comments(comments)) == 2
