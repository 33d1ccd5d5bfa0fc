import logging

from .errors import MissingInput
from .models import GenerationRequest

logger = logging.getLogger(__name__)


def _blank(value):
    return not value or value.isspace()


def validate_request(request: GenerationRequest) -> GenerationRequest:
    """
    Ensures a description or a diff was supplied.

    Blank `changes`/`git_diff` values come back as None so later steps only see
    real content. `commit_type` and `context` are passed through as given.
    """
    changes = None if _blank(request.changes) else request.changes
    git_diff = None if _blank(request.git_diff) else request.git_diff

    if changes is None and git_diff is None:
        logger.info("Rejecting request with neither changes nor git diff.")
        raise MissingInput()

    return request.model_copy(update={"changes": changes, "git_diff": git_diff})
