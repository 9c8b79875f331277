"""
Embeddable SVG badge.

Pure rendering: any text/style/link produces a well-formed SVG document.
"""

from xml.sax.saxutils import escape

BADGE_HEIGHT = 28
DEFAULT_STYLE = "cyberpunk"
DEFAULT_TEXT = "Butlerian Jihad"

# style -> (background, border, text, glow)
PALETTES: dict[str, dict[str, str]] = {
    "cyberpunk": {
        "bg": "#0a0a0a",
        "border": "#00ffff",
        "text": "#00ffff",
        "glow": "rgba(0, 255, 255, 0.5)",
    },
    "dark": {
        "bg": "#000000",
        "border": "#666666",
        "text": "#ffffff",
        "glow": "rgba(255, 255, 255, 0.3)",
    },
    "red": {
        "bg": "#1a0000",
        "border": "#ff4444",
        "text": "#ff4444",
        "glow": "rgba(255, 68, 68, 0.5)",
    },
}

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def xml_escape(value: str) -> str:
    """Escape the five XML special characters."""
    return escape(value, _XML_ENTITIES)


def badge_width(text: str) -> int:
    return 7 * len(text) + 40


def render_badge(text: str, style: str, link: str) -> str:
    """Render the badge as an SVG document linking to ``link``."""
    palette_name = style if style in PALETTES else DEFAULT_STYLE
    theme = PALETTES[palette_name]
    width = badge_width(text)
    filter_id = f"glow-{palette_name}"

    return f"""<?xml version="1.0" encoding="UTF-8"?>
<svg width="{width}" height="{BADGE_HEIGHT}" xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink">
  <defs>
    <filter id="{filter_id}">
      <feGaussianBlur stdDeviation="2" result="coloredBlur"/>
      <feMerge>
        <feMergeNode in="coloredBlur"/>
        <feMergeNode in="SourceGraphic"/>
      </feMerge>
    </filter>
  </defs>
  <a href="{xml_escape(link)}" target="_blank">
    <rect width="{width}" height="{BADGE_HEIGHT}" rx="4" fill="{theme['bg']}" stroke="{theme['border']}" stroke-width="1.5" filter="url(#{filter_id})"/>
    <text x="{width / 2:g}" y="{BADGE_HEIGHT / 2 + 4:g}" font-family="'Courier New', Monaco, monospace" font-size="11" font-weight="bold" fill="{theme['text']}" text-anchor="middle" dominant-baseline="middle">{xml_escape(text)}</text>
  </a>
</svg>"""
