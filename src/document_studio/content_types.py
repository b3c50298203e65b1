"""
Content Types

The four top-level document shapes. Each constrains which layout categories
are offered, the canvas every exporter renders into, and the export formats
that make sense for it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union


class ContentType(str, Enum):
    """Top-level document shape."""
    presentation = "presentation"
    post = "post"
    resume = "resume"
    website = "website"


class DocumentShape(str, Enum):
    """How the assembler arranges items."""
    paginated = "paginated"
    scroll = "scroll"
    single = "single"


@dataclass(frozen=True)
class ContentTypeSpec:
    """Canvas and assembly rules for one content type."""
    key: ContentType
    name: str
    shape: DocumentShape
    width: int
    height: Optional[int]  # None: grows with content
    aspect_ratio: str
    categories: Tuple[str, ...]
    export_formats: Tuple[str, ...]

    @property
    def canvas_height(self) -> int:
        """Height used by fixed-canvas exporters (deck, snapshot)."""
        if self.height is not None:
            return self.height
        return int(self.width * 2 / 3)


CONTENT_TYPES: Dict[ContentType, ContentTypeSpec] = {
    ContentType.presentation: ContentTypeSpec(
        key=ContentType.presentation,
        name="Presentation",
        shape=DocumentShape.paginated,
        width=1280,
        height=720,
        aspect_ratio="16/9",
        categories=("presentation",),
        export_formats=("html", "pptx", "png"),
    ),
    ContentType.post: ContentTypeSpec(
        key=ContentType.post,
        name="Social Post",
        shape=DocumentShape.single,
        width=1080,
        height=1080,
        aspect_ratio="1/1",
        categories=("social",),
        export_formats=("html", "png", "pptx"),
    ),
    ContentType.resume: ContentTypeSpec(
        key=ContentType.resume,
        name="Resume",
        shape=DocumentShape.paginated,
        width=794,
        height=1123,
        aspect_ratio="210mm/297mm",
        categories=("resume",),
        export_formats=("html", "pptx", "png"),
    ),
    ContentType.website: ContentTypeSpec(
        key=ContentType.website,
        name="Website Section",
        shape=DocumentShape.scroll,
        width=1200,
        height=None,
        aspect_ratio="auto",
        categories=("website",),
        export_formats=("html", "png"),
    ),
}

# Layout category -> content type, for catalogs that tag layouts by category only.
CATEGORY_CONTENT_TYPES: Dict[str, ContentType] = {
    "presentation": ContentType.presentation,
    "social": ContentType.post,
    "resume": ContentType.resume,
    "website": ContentType.website,
}


def get_content_type_spec(content_type: Union[ContentType, str]) -> ContentTypeSpec:
    """Look up a content type; unknown values fall back to presentation."""
    try:
        return CONTENT_TYPES[ContentType(content_type)]
    except ValueError:
        return CONTENT_TYPES[ContentType.presentation]
