"""Repositories for projects, cases, tenders and crawl configs."""

from bidsmart.repositories.cases import CaseRepository
from bidsmart.repositories.crawl_configs import CrawlConfigRepository
from bidsmart.repositories.projects import ProjectRepository
from bidsmart.repositories.tenders import TenderRepository

__all__ = [
    "CaseRepository",
    "CrawlConfigRepository",
    "ProjectRepository",
    "TenderRepository",
]
