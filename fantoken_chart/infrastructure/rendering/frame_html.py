"""
Farcaster vNext frame document rendering.

The card SVG travels inline as a base64 data URI, so a frame is fully described
by one HTML response and nothing is cached between requests.
"""

import base64
import json
from html import escape
from typing import Optional

from fantoken_chart.domain.entities.frame import FrameView

ASPECT_RATIO = "1.91:1"


def svg_data_uri(svg: str) -> str:
    return "data:image/svg+xml;base64," + base64.b64encode(svg.encode("utf-8")).decode("ascii")


def frame_meta(view: FrameView, post_url: str) -> list[tuple[str, str]]:
    """Ordered (property, content) pairs describing *view*."""
    image = svg_data_uri(view.image_svg)
    meta = [
        ("fc:frame", "vNext"),
        ("fc:frame:image", image),
        ("fc:frame:image:aspect_ratio", ASPECT_RATIO),
        ("fc:frame:post_url", post_url),
        ("og:image", image),
    ]
    if view.text_input:
        meta.append(("fc:frame:input:text", view.text_input))
    for index, button in enumerate(view.buttons, start=1):
        meta.append((f"fc:frame:button:{index}", button.label))
        meta.append((f"fc:frame:button:{index}:action", button.action))
        meta.append((f"fc:frame:button:{index}:target", button.target))
    if view.state:
        meta.append(("fc:frame:state", json.dumps(view.state)))
    return meta


def render_frame_html(
    view: FrameView,
    post_url: str,
    title: Optional[str] = None,
    description: Optional[str] = None,
    body: str = "",
) -> str:
    meta = frame_meta(view, post_url)
    if title:
        meta.append(("og:title", title))
    if description:
        meta.append(("og:description", description))

    head = ['<meta charset="utf-8"/>']
    if title:
        head.append(f"<title>{escape(title)}</title>")
    if description:
        head.append(f'<meta name="description" content="{escape(description)}"/>')
    head.extend(
        f'<meta property="{escape(prop)}" content="{escape(content)}"/>' for prop, content in meta
    )
    return (
        "<!DOCTYPE html>\n<html>\n<head>\n"
        + "\n".join(head)
        + f"\n</head>\n<body>{escape(body)}</body>\n</html>\n"
    )
