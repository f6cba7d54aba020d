"""
Domain entities for a single frame interaction and the frame rendered back.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class FrameRequest:
    """What the frame handler knows about one GET or POST.

    input_text:    text typed into the frame input, if any.
    action:        the `action` query parameter of the post target.
    requester_fid: fid of the user who pressed a button (POST only).
    fid_param:     `fid` query parameter of the frame URL, if present.
    is_post:       True when the request carries a frame message.
    """

    input_text: Optional[str] = None
    action: Optional[str] = None
    requester_fid: Optional[int] = None
    fid_param: Optional[str] = None
    is_post: bool = False


@dataclass(frozen=True)
class FrameButton:
    label: str
    action: str
    target: str


@dataclass(frozen=True)
class FrameView:
    image_svg: str
    buttons: list[FrameButton]
    text_input: str
    state: dict = field(default_factory=dict)
