"""devkit: release readiness checks for GitHub-hosted projects."""

__version__ = "0.1.0"
