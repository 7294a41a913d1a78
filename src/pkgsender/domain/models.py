"""Core domain models for pkgsender."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PackageDescriptor(BaseModel):
    """A package file found under the static root.

    Built fresh on every scan and discarded once the listing is rendered.
    """

    model_config = ConfigDict(frozen=True)

    filepath: str = Field(description="Absolute path of the package file")
    directory: str = Field(description="Absolute path of the containing directory")
    name: str = Field(description="File basename")
    size: int = Field(ge=0, description="Size in bytes")
    size_display: str = Field(description="Human-readable size, e.g. '2 KB'")


class InstallOutcome(BaseModel):
    """Result of asking the console to install a package."""

    model_config = ConfigDict(frozen=True)

    success: bool
    message: str

    @classmethod
    def succeeded(cls, message: str) -> InstallOutcome:
        return cls(success=True, message=message)

    @classmethod
    def failed(cls, message: str) -> InstallOutcome:
        return cls(success=False, message=message)

    @property
    def display_text(self) -> str:
        """Text shown to the user in the result page."""
        return self.message if self.success else f"Error: {self.message}"
