"""Build environment resolution for package directories."""

from .context import BuildContext, BuildPackage
from .importer import MultiEnvironmentImporter

__all__ = ["BuildContext", "BuildPackage", "MultiEnvironmentImporter"]
