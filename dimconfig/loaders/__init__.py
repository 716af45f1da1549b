"""Config file loaders."""

from dimconfig.loaders.content_loader import ContentLoader, FileContentLoader, parse_text

__all__ = ["ContentLoader", "FileContentLoader", "parse_text"]
