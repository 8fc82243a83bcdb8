# ================================
# EXTERNAL RESOURCES FIXTURE MODULE (tests/external_resources.py)
# ================================

"""Resources served by another admin, listed in navigation only."""

from tests.sample_app import AuthorResource


class ExternalAuthorResource(AuthorResource):
    slug = "external-authors"
    navigation_group = "External"


RESOURCES = [ExternalAuthorResource]
