"""Pure fit computation: which axis drives the resize and whether to resize at all."""

from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from ...common.schemas import ImageGeometry, RenditionBox


class FitMode(StrEnum):
    CONTAIN = "contain"
    COVER = "cover"


class Axis(StrEnum):
    WIDTH = "width"
    HEIGHT = "height"


class TargetBox(BaseModel):
    """Computed output dimensions for one rendition."""

    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    axis: Axis
    needs_resize: bool

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height


def priority_axis(source_ratio: float, frame_ratio: float, mode: FitMode) -> Axis:
    """
    Pick the axis whose target value is fixed first.

    Contain constrains the width when the source is relatively wider than the
    frame; Cover does the opposite. Equal ratios always pick the height.
    """
    if mode == FitMode.CONTAIN and source_ratio > frame_ratio:
        return Axis.WIDTH
    if mode == FitMode.COVER and source_ratio < frame_ratio:
        return Axis.WIDTH
    return Axis.HEIGHT


def compute_target(
    geometry: ImageGeometry,
    box: RenditionBox,
    mode: FitMode = FitMode.CONTAIN,
) -> TargetBox:
    """
    Compute target dimensions of a rendition.

    The non-priority side keeps the source aspect ratio (truncated, at least
    1px). Sources that are not larger than the target on the priority axis are
    never upscaled: ``needs_resize`` is False and the caller copies them as is.

    Cover does not crop, so its output may exceed the frame on one axis.

    Raises:
        ValueError: If ``box`` is empty
    """
    if box.is_empty or box.width is None or box.height is None:
        raise ValueError("Cannot fit into an empty rendition box")

    source_ratio = geometry.ratio
    frame_ratio = box.width / box.height
    axis = priority_axis(source_ratio, frame_ratio, mode)

    if axis is Axis.WIDTH:
        width = box.width
        height = max(1, int(width / source_ratio))
        needs_resize = geometry.width > width
    else:
        height = box.height
        width = max(1, int(height * source_ratio))
        needs_resize = geometry.height > height

    return TargetBox(width=width, height=height, axis=axis, needs_resize=needs_resize)
