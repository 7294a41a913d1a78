"""Tests for the domain models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pkgsender.domain.models import InstallOutcome, PackageDescriptor


class TestPackageDescriptor:
    def test_is_immutable(self) -> None:
        pkg = PackageDescriptor(
            filepath="/data/pkgs/a.pkg",
            directory="/data/pkgs",
            name="a.pkg",
            size=10,
            size_display="10 B",
        )
        with pytest.raises(ValidationError):
            pkg.name = "b.pkg"  # type: ignore[misc]

    def test_rejects_negative_size(self) -> None:
        with pytest.raises(ValidationError):
            PackageDescriptor(
                filepath="/x.pkg", directory="/", name="x.pkg", size=-1, size_display="?"
            )


class TestInstallOutcome:
    def test_success_text_is_message(self) -> None:
        outcome = InstallOutcome.succeeded("Request sent successfully!")
        assert outcome.success is True
        assert outcome.display_text == "Request sent successfully!"

    def test_failure_text_is_prefixed(self) -> None:
        outcome = InstallOutcome.failed("PS4 API error (500): bad")
        assert outcome.success is False
        assert outcome.display_text == "Error: PS4 API error (500): bad"
