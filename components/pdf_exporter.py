# components/pdf_exporter.py
# Printable copy of the report: drawn with Pillow onto a fixed-width column,
# then cut into A4 pages and saved as a multi-page PDF.

import logging
import math
import threading
from dataclasses import dataclass, field
from io import BytesIO
from typing import List, Optional

from PIL import Image, ImageDraw, ImageFont

from components.utils import report_recipient_label, split_paragraphs

logger = logging.getLogger(__name__)

PDF_FILE_NAME = "HVAC-rapport.pdf"

RENDER_WIDTH = 800          # px, before scaling
RENDER_SCALE = 2
PAGE_SIZE_MM = (210, 297)   # A4 portrait
PAGE_MARGIN_MM = 10

COLORS = {
    'title': '#1e3a8a',
    'heading': '#1e40af',
    'text': '#374151',
    'muted': '#4b5563',
    'step_title': '#111827',
    'summary_fill': '#f8fafc',
    'summary_outline': '#e2e8f0',
    'step_outline': '#e5e7eb',
}


class ReportExportError(Exception):
    """Raised when the PDF could not be produced; nothing is offered for download."""


# ==================== FONTS ====================
def _font(size, bold=False):
    names = ("DejaVuSans-Bold.ttf", "arialbd.ttf") if bold else ("DejaVuSans.ttf", "arial.ttf")
    for name in names:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def _load_fonts(scale):
    return {
        'title': _font(24 * scale, bold=True),
        'heading': _font(20 * scale, bold=True),
        'step_title': _font(17 * scale, bold=True),
        'body': _font(14 * scale),
        'small': _font(13 * scale),
    }


# ==================== LAYOUT ====================
@dataclass
class _Line:
    text: str
    font: object
    fill: str
    height: int


@dataclass
class _Block:
    lines: List[_Line] = field(default_factory=list)
    align: str = "left"
    fill: Optional[str] = None
    outline: Optional[str] = None
    inset: int = 0
    space_after: int = 0

    @property
    def height(self) -> int:
        return sum(line.height for line in self.lines) + 2 * self.inset + self.space_after


def _line_height(draw, font, spacing):
    bbox = draw.textbbox((0, 0), "Ág", font=font)
    return (bbox[3] - bbox[1]) + spacing


def wrap_text(draw, text, font, max_width) -> List[str]:
    """Greedy word wrap; a single word wider than the column is kept whole."""
    lines: List[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}".strip()
        if current and draw.textlength(candidate, font=font) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def _text_lines(draw, text, font, fill, max_width, spacing) -> List[_Line]:
    height = _line_height(draw, font, spacing)
    return [_Line(t, font, fill, height) for t in wrap_text(draw, text, font, max_width)]


def _build_blocks(draw, report, user_data, fonts, column_width, scale) -> List[_Block]:
    gap = 8 * scale
    inset = 16 * scale
    inner_width = column_width - 2 * inset
    blocks = [
        _Block(_text_lines(draw, "HVAC Compatibiliteitsrapport", fonts['title'], COLORS['title'], column_width, gap),
               align="center"),
        _Block(_text_lines(draw, f"Voor: {report_recipient_label(user_data)}", fonts['small'], COLORS['muted'],
                           column_width, gap),
               align="center", space_after=2 * gap),
    ]

    summary = _text_lines(draw, "Samenvatting", fonts['heading'], COLORS['heading'], inner_width, gap)
    summary += _text_lines(draw, report.summary, fonts['body'], COLORS['text'], inner_width, gap // 2)
    blocks.append(_Block(summary, fill=COLORS['summary_fill'], outline=COLORS['summary_outline'],
                         inset=inset, space_after=3 * gap))

    blocks.append(_Block(_text_lines(draw, "Uw Gepersonaliseerde Stappenplan", fonts['heading'],
                                     COLORS['heading'], column_width, gap), space_after=gap))

    for step in report.steps:
        lines = _text_lines(draw, step.title, fonts['step_title'], COLORS['step_title'], inner_width, gap)
        for paragraph in split_paragraphs(step.content):
            paragraph_lines = _text_lines(draw, paragraph, fonts['body'], COLORS['text'], inner_width, gap // 2)
            if paragraph_lines:
                paragraph_lines[-1].height += gap // 2
            lines += paragraph_lines
        blocks.append(_Block(lines, fill='white', outline=COLORS['step_outline'], inset=inset,
                             space_after=2 * gap))
    return blocks


# ==================== RASTER ====================
def render_report_image(report, user_data=None, scale: int = RENDER_SCALE) -> Image.Image:
    """Draw header, recipient, summary block and one block per step into one tall image."""
    width = RENDER_WIDTH * scale
    padding = 32 * scale
    column_width = width - 2 * padding
    fonts = _load_fonts(scale)

    measure = ImageDraw.Draw(Image.new('RGB', (1, 1)))
    blocks = _build_blocks(measure, report, user_data, fonts, column_width, scale)
    height = 2 * padding + sum(b.height for b in blocks)

    img = Image.new('RGB', (width, height), color='white')
    draw = ImageDraw.Draw(img)
    radius = 8 * scale

    y = padding
    for block in blocks:
        box_height = block.height - block.space_after
        if block.fill or block.outline:
            draw.rounded_rectangle(
                [(padding, y), (padding + column_width, y + box_height)],
                radius=radius, fill=block.fill, outline=block.outline, width=max(1, scale),
            )
        text_y = y + block.inset
        for line in block.lines:
            if block.align == "center":
                text_x = padding + (column_width - draw.textlength(line.text, font=line.font)) / 2
            else:
                text_x = padding + block.inset
            draw.text((text_x, text_y), line.text, fill=line.fill, font=line.font)
            text_y += line.height
        y += block.height

    return img


# ==================== PAGINATION ====================
def paginate(image: Image.Image) -> List[Image.Image]:
    """
    Scale the raster to the A4 content width and slice it into pages,
    each with the same margin on all four sides.
    """
    content_width_mm = PAGE_SIZE_MM[0] - 2 * PAGE_MARGIN_MM
    px_per_mm = image.width / content_width_mm
    page_w = round(PAGE_SIZE_MM[0] * px_per_mm)
    page_h = round(PAGE_SIZE_MM[1] * px_per_mm)
    margin = round(PAGE_MARGIN_MM * px_per_mm)
    slice_h = page_h - 2 * margin

    pages = []
    for page_no in range(max(1, math.ceil(image.height / slice_h))):
        top = page_no * slice_h
        tile = image.crop((0, top, image.width, min(top + slice_h, image.height)))
        page = Image.new('RGB', (page_w, page_h), color='white')
        page.paste(tile, (margin, margin))
        pages.append(page)
    return pages


def paginate_to_pdf(image: Image.Image) -> bytes:
    pages = paginate(image)
    dpi = image.width / (PAGE_SIZE_MM[0] - 2 * PAGE_MARGIN_MM) * 25.4

    buffer = BytesIO()
    pages[0].save(buffer, format='PDF', save_all=True, append_images=pages[1:], resolution=dpi)
    return buffer.getvalue()


def export_report_pdf(report, user_data=None) -> bytes:
    return paginate_to_pdf(render_report_image(report, user_data))


class ReportExporter:
    """Allows one export at a time; a second request while busy is ignored."""

    def __init__(self):
        self._lock = threading.Lock()

    @property
    def in_flight(self) -> bool:
        return self._lock.locked()

    def export(self, report, user_data=None) -> Optional[bytes]:
        if not self._lock.acquire(blocking=False):
            logger.info("PDF export already running; request ignored")
            return None
        try:
            pdf = export_report_pdf(report, user_data)
        except Exception as e:
            logger.error(f"Error generating report PDF: {e}", exc_info=True)
            raise ReportExportError("Het PDF-rapport kon niet worden gemaakt.") from e
        finally:
            self._lock.release()
        logger.info("Exported report PDF (%d bytes)", len(pdf))
        return pdf
