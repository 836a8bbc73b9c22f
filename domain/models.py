from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_SAFEZONE_MARGIN = 0.02
BACKGROUND_ROLE = "background"
DEFAULT_LABELS: tuple[str, ...] = (
    "background",
    "logo",
    "main-subject",
    "domain",
    "product-name",
    "sub-content-1",
    "sub-content-2",
    "cta",
    "disclaimer",
)

HorizontalAlignment = Literal["left", "center", "right"]
VerticalAlignment = Literal["top", "middle", "bottom"]


class DocumentModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Bounds(DocumentModel):
    top: float
    left: float
    bottom: float
    right: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def union(self, other: Bounds) -> Bounds:
        return Bounds(
            top=min(self.top, other.top),
            left=min(self.left, other.left),
            bottom=max(self.bottom, other.bottom),
            right=max(self.right, other.right),
        )


class CoordinatePosition(DocumentModel):
    horizontal_alignment: HorizontalAlignment = "center"
    vertical_alignment: VerticalAlignment = "middle"
    horizontal_offset: Optional[float] = None
    vertical_offset: Optional[float] = None
    custom_x: Optional[float] = None
    custom_y: Optional[float] = None

    @property
    def has_custom_coordinates(self) -> bool:
        return self.custom_x is not None and self.custom_y is not None


class PositioningRule(DocumentModel):
    max_width_percent: float
    max_height_percent: float
    apply_safezone: bool = True
    coordinate_position: CoordinatePosition = Field(default_factory=CoordinatePosition)


class LayoutRules(DocumentModel):
    visibility: Dict[str, bool] = Field(default_factory=dict)
    positioning: Dict[str, PositioningRule] = Field(default_factory=dict)
    render_order: Optional[List[str]] = None

    def is_role_visible(self, role: str) -> bool:
        return self.visibility.get(role) is not False


class LayoutOption(DocumentModel):
    name: str = Field(..., min_length=1)
    safezone_margin: Optional[float] = None
    rules: LayoutRules = Field(default_factory=LayoutRules)

    @property
    def effective_safezone_margin(self) -> float:
        if self.safezone_margin is None:
            return DEFAULT_SAFEZONE_MARGIN
        return self.safezone_margin


class Layout(DocumentModel):
    aspect_ratio: str
    width: int
    height: int
    options: List[LayoutOption] = Field(default_factory=list)

    @field_validator("options", mode="after")
    @classmethod
    def ensure_unique_option_names(cls, options: List[LayoutOption]) -> List[LayoutOption]:
        seen: set[str] = set()
        for option in options:
            if option.name in seen:
                msg = f"Duplicate option name found: {option.name}"
                raise ValueError(msg)
            seen.add(option.name)
        return options


class Channel(DocumentModel):
    id: str
    name: str = ""
    layouts: List[Layout] = Field(default_factory=list)


class RuleDocument(DocumentModel):
    channels: List[Channel] = Field(default_factory=list)


class SourceElement(DocumentModel):
    id: str
    name: str = ""
    type: Literal["group", "layer"] = "layer"
    bounds: Optional[Bounds] = None
    visible: bool = True
    parent: Optional[str] = None
    text_content: Optional[str] = None
    children: List[SourceElement] = Field(default_factory=list)


class GeneratedElement(DocumentModel):
    id: str
    name: str
    role: str
    x: float
    y: float
    width: int
    height: int
    visible: bool
    parent: Optional[str] = None
    original_bounds: Optional[Bounds] = None
    coordinate_position: Optional[CoordinatePosition] = None


class GeneratedLayout(DocumentModel):
    name: str
    width: int
    height: int
    aspect_ratio: str
    elements: List[GeneratedElement] = Field(default_factory=list)
    rules: Optional[LayoutRules] = None

    def visible_elements(self) -> List[GeneratedElement]:
        return [element for element in self.elements if element.visible]


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Size:
    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class SafeArea:
    left: float
    top: float
    width: float
    height: float
