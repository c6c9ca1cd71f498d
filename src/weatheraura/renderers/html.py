"""Self-contained HTML page for one aura.

Produced for embedding via st.components.v1.html() and for the CLI's
``--format html`` output. The aura itself is a single div styled by
renderers/css.py; clip-path would cut off a box-shadow, so the shadow is
moved to a drop-shadow filter on a wrapper.
"""

from __future__ import annotations

import html

from weatheraura.models import AuraDescriptor
from weatheraura.renderers.css import declarations, pulse_keyframes, render_css

_BG = "#0d1b35"
_TEXT_COLOR = "#e8d5a3"
_SUBTEXT_COLOR = "#aaaaaa"


def render_aura_html(
    descriptor: AuraDescriptor,
    title: str = "",
    subtitle: str = "",
    lang: str = "en",
) -> str:
    """Return a self-contained HTML page with the aura centred on a dark background.

    Args:
        descriptor: Fully composed aura.
        title: Caption under the aura (usually the place name). Escaped.
        subtitle: Second caption line (weather type, severity). Escaped.
        lang: Language code for the ``lang`` attribute.

    Returns:
        HTML string suitable for st.components.v1.html() or writing to a file.
    """
    css = render_css(descriptor)
    shadow = css.pop("box-shadow")
    caption = ""
    if title:
        caption += f'<div class="aura-title">{html.escape(title)}</div>'
    if subtitle:
        caption += f'<div class="aura-subtitle">{html.escape(subtitle)}</div>'

    return f"""<!DOCTYPE html>
<html lang="{html.escape(lang)}">
<head>
<meta charset="utf-8">
<style>
html, body {{
  margin: 0;
  height: 100%;
  background: {_BG};
}}
body {{
  display: flex;
  flex-direction: column;
  align-items: center;
  justify-content: center;
  font-family: 'Apple SD Gothic Neo', 'Malgun Gothic', sans-serif;
}}
.aura-wrap {{
  filter: drop-shadow({shadow});
}}
.aura {{
{declarations(css)}
}}
{pulse_keyframes(descriptor)}
.aura-title {{
  margin-top: 1.6rem;
  color: {_TEXT_COLOR};
  font-size: 1.2rem;
  letter-spacing: 0.02em;
}}
.aura-subtitle {{
  margin-top: 0.3rem;
  color: {_SUBTEXT_COLOR};
  font-size: 0.85rem;
}}
</style>
</head>
<body>
<div class="aura-wrap" data-mode="{descriptor.mode.value}"><div class="aura"></div></div>
{caption}
</body>
</html>
"""
