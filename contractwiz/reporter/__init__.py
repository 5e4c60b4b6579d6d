"""Human-readable documents derived from a contract configuration."""

from contractwiz.reporter.readme import FeatureCheck, ReadmeGenerator, render_readme

__all__ = [
    "FeatureCheck",
    "ReadmeGenerator",
    "render_readme",
]
