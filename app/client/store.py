"""
Client-side content store for projects and skills.

Fetches from the API and falls back to the built-in demo content on any
failure, so a page can always render something.
"""
from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, Optional

from app.client.api import APIError, PortfolioClient
from app.seed_data import DEMO_PROJECTS, DEMO_SKILLS
from app.utils.helpers import timestamp_ms

logger = logging.getLogger(__name__)


class ContentStore:
    def __init__(self, client: PortfolioClient) -> None:
        self.client = client
        self.projects: List[Dict[str, Any]] = copy.deepcopy(DEMO_PROJECTS)
        self.skills: List[Dict[str, Any]] = copy.deepcopy(DEMO_SKILLS)
        self.loading = False
        self.error: Optional[str] = None

    @property
    def featured_projects(self) -> List[Dict[str, Any]]:
        return [p for p in self.projects if p.get("featured")]

    async def fetch_projects(self) -> None:
        self.loading, self.error = True, None
        try:
            self.projects = await self.client.list_projects()
        except APIError as exc:
            logger.info("Using demo projects: %s", exc)
            self.projects = copy.deepcopy(DEMO_PROJECTS)
        finally:
            self.loading = False

    async def fetch_skills(self) -> None:
        self.loading, self.error = True, None
        try:
            self.skills = await self.client.list_skills()
        except APIError as exc:
            logger.info("Using demo skills: %s", exc)
            self.skills = copy.deepcopy(DEMO_SKILLS)
        finally:
            self.loading = False

    def add_project(self, project: Dict[str, Any]) -> Dict[str, Any]:
        """Append locally with a timestamp id; nothing is sent to the API."""
        new_project = dict(project, id=str(timestamp_ms()))
        self.projects = self.projects + [new_project]
        return new_project
