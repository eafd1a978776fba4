"""Errors raised while optimizing a single article.

None of these abort a batch: the orchestrator catches them per article and
marks that article as skipped.
"""


class PipelineError(Exception):
    """Base class for per-article pipeline failures."""


class NoReferencesFound(PipelineError):
    """The resolver returned no candidate reference URLs for the topic."""


class NoExtractableContent(PipelineError):
    """Neither extraction tier produced usable text for any reference."""


class SearchTransportError(PipelineError):
    """The search API call failed. Recovered by scraping, never surfaced."""


class RewriteFailure(PipelineError):
    """The rewrite model errored or returned nothing usable."""


class PublishFailure(PipelineError):
    """The Article API rejected or failed the update."""


class ArticleListError(Exception):
    """The initial article listing failed. Fatal for the whole run."""
