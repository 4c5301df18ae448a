"""
Pydantic models for the metadata document shipped next to each app.

The metadata document carries marketplace content (descriptions, vendor,
installation steps, images). It is validated once when an app directory is
loaded; the resulting model is the typed view hosts read from.
"""

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class Asset(BaseModel):
    """Reference to a bundled image or file."""
    model_config = ConfigDict(extra="allow")

    type: Literal["asset"]
    src: StrictStr = Field(..., min_length=1)


class Vendor(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: StrictStr = Field(..., min_length=1)


class Overview(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    content: StrictStr = Field(..., min_length=1)
    carousel_images: Optional[List[Asset]] = Field(default=None, alias="carouselImages")


class InstallationStep(BaseModel):
    """One step of the installation guide."""
    model_config = ConfigDict(extra="allow")

    title: StrictStr
    description: StrictStr
    images: Optional[List[Asset]] = None


class AppContent(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    short_description: StrictStr = Field(..., min_length=1, alias="shortDescription")
    vendor: Vendor
    overview: Overview
    installation: List[InstallationStep]
    resources: List[Any]
    logo_image: Optional[Asset] = Field(default=None, alias="logoImage")


class MetadataDocument(BaseModel):
    """
    Metadata document for an integration app.

    Unknown keys are kept so newer documents still load.
    """
    model_config = ConfigDict(extra="allow")

    content: AppContent

    @property
    def assets(self) -> List[Asset]:
        """Every asset referenced by the document."""
        content = self.content
        found: List[Asset] = []
        if content.logo_image:
            found.append(content.logo_image)
        found.extend(content.overview.carousel_images or [])
        for step in content.installation:
            found.extend(step.images or [])
        return found
