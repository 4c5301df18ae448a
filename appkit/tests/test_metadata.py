"""
Tests for the metadata document models.
"""

import json

import pytest
from pydantic import ValidationError

from appkit.models.metadata import Asset, MetadataDocument

from conftest import BASIC_APP_DIR, VALID_METADATA


class TestMetadataDocument:
    """Tests for MetadataDocument."""

    def test_minimal_document(self):
        document = MetadataDocument.model_validate(VALID_METADATA)

        assert document.content.short_description == "A test app"
        assert document.content.vendor.name == "Tests Inc"
        assert document.content.logo_image is None
        assert document.assets == []

    def test_example_document_assets(self):
        with open(BASIC_APP_DIR / "metadata.json", "r", encoding="utf-8") as f:
            document = MetadataDocument.model_validate(json.load(f))

        assert [asset.src for asset in document.assets] == [
            "assets/logo.svg",
            "assets/overview.png",
            "assets/configure.png",
        ]
        assert document.content.resources[0]["title"] == "API documentation"

    def test_unknown_keys_are_kept(self):
        data = json.loads(json.dumps(VALID_METADATA))
        data["content"]["pricing"] = "free"
        data["schemaVersion"] = 2

        document = MetadataDocument.model_validate(data)

        assert document.content.pricing == "free"
        assert document.model_dump()["schemaVersion"] == 2

    def test_missing_content(self):
        with pytest.raises(ValidationError):
            MetadataDocument.model_validate({})


class TestAsset:
    """Tests for asset references."""

    def test_valid(self):
        assert Asset(type="asset", src="logo.png").src == "logo.png"

    @pytest.mark.parametrize("data", [
        {"type": "image", "src": "logo.png"},
        {"type": "asset", "src": ""},
        {"type": "asset", "src": 42},
        {"type": "asset"},
    ])
    def test_invalid(self, data):
        with pytest.raises(ValidationError):
            Asset.model_validate(data)
