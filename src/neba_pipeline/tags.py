"""Cache tag definitions.

Tags are hierarchical so one invalidation can target a whole context, a
category, or a single entity:

    build_tags("bowler", "01ARZ3NDEK")
    # {"website", "website:bowlers", "website:bowler:01ARZ3NDEK"}

    build_tags("bowler")
    # {"website", "website:bowlers"}
"""

from __future__ import annotations

from typing import Any

from neba_pipeline.keys import WEBSITE_CONTEXT, render_part
from neba_pipeline.types import Tag


class AwardTypes:
    BOWLER_OF_THE_YEAR = "bowler-of-the-year"
    HIGH_AVERAGE = "high-average"
    HIGH_BLOCK = "high-block"


class JobTypes:
    DOCUMENT_SYNC = "doc-sync"


def build_tags(
    category: str, *parameters: Any, context: str = WEBSITE_CONTEXT
) -> frozenset[Tag]:
    """Build the tag set for a query family and its parameters.

    The entity tag joins every parameter, so ("job", "doc-sync", "bylaws")
    yields "website:job:doc-sync:bylaws".
    """
    if not category:
        raise ValueError("category must not be empty")

    tags = {context, f"{context}:{category}s"}
    if parameters:
        entity = ":".join(render_part(p) for p in parameters)
        tags.add(f"{context}:{category}:{entity}")
    return frozenset(tags)


def document_tags(document_key: str) -> frozenset[Tag]:
    return build_tags("document", document_key)


def bowler_tags(bowler_id: Any) -> frozenset[Tag]:
    return build_tags("bowler", bowler_id)


def all_bowlers_tags() -> frozenset[Tag]:
    return build_tags("bowler")


def tournament_tags(tournament_id: Any) -> frozenset[Tag]:
    return build_tags("tournament", tournament_id)


def all_tournaments_tags() -> frozenset[Tag]:
    return build_tags("tournament")


def award_tags(award_type: str) -> frozenset[Tag]:
    return build_tags("award", award_type)


def all_awards_tags() -> frozenset[Tag]:
    return build_tags("award")


def job_tags(job_type: str, target: str) -> frozenset[Tag]:
    return build_tags("job", job_type, target)
