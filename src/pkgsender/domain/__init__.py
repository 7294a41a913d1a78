"""Domain models for pkgsender.

Value objects passed between the scanner, the installer and the web
frontend. All models use Pydantic v2 and are immutable.
"""

from pkgsender.domain.models import InstallOutcome, PackageDescriptor

__all__ = ["InstallOutcome", "PackageDescriptor"]
