import logging
from typing import List

from contrib_cards.models import RepoContribution

logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = "No contributions found"


def placeholder_repo() -> RepoContribution:
    return RepoContribution(name_with_owner=PLACEHOLDER_NAME, stargazer_count=0, contribution_count=0)


def top_repositories(repos: List[RepoContribution], limit: int, include_private: bool = False) -> List[RepoContribution]:
    """
    Return the `limit` repositories with the most contributions, highest first.

    Private repositories are dropped unless `include_private` is set. The sort
    is stable, so repositories with equal counts keep their merge order.
    When nothing is left a single placeholder row is returned so the card
    always has something to draw.
    """
    visible = repos if include_private else [r for r in repos if not r.is_private]
    ranked = sorted(visible, key=lambda r: r.contribution_count, reverse=True)[:max(limit, 0)]
    if not ranked:
        logger.warning("No contributions found. Generating placeholder SVG.")
        return [placeholder_repo()]
    return ranked
