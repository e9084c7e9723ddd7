"""ReportLab-backed renderer producing the contract PDF in memory."""

import asyncio
import logging
from datetime import date
from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.pdfgen import canvas

from app.application.interfaces import ContractDocumentRenderer
from app.domain.entities import Contract
from app.domain.exceptions import RenderError
from app.infrastructure.rendering.contract_layout import TITLE, build_contract_lines

logger = logging.getLogger(__name__)

PAGE_MARGIN = 60
TITLE_FONT_SIZE = 20
BODY_FONT_SIZE = 12
LINE_HEIGHT = 18


def wrap_line(text: str, font_name: str, font_size: float, max_width: float) -> list[str]:
    """Break ``text`` into pieces no wider than ``max_width``.

    Wraps per character since CJK text carries no spaces to split on.
    """
    if not text:
        return [""]

    pieces: list[str] = []
    current = ""
    for char in text:
        candidate = current + char
        if current and pdfmetrics.stringWidth(candidate, font_name, font_size) > max_width:
            pieces.append(current)
            current = char
        else:
            current = candidate
    pieces.append(current)
    return pieces


class ReportLabContractRenderer(ContractDocumentRenderer):
    """Infrastructure adapter that draws the contract layout on A4 pages."""

    def __init__(self, font_name: str = "STSong-Light"):
        self._font_name = font_name

    async def render(self, contract: Contract, signed_on: date | None = None) -> bytes:
        signed_on = signed_on or date.today()
        try:
            content = await asyncio.to_thread(self._render_sync, contract, signed_on)
        except RenderError:
            raise
        except Exception as exc:
            logger.exception("Rendering contract %s failed", contract.id)
            raise RenderError(f"could not render contract {contract.id}") from exc

        logger.debug("Rendered contract %s (%d bytes)", contract.id, len(content))
        return content

    def _ensure_font(self) -> None:
        if self._font_name not in pdfmetrics.getRegisteredFontNames():
            pdfmetrics.registerFont(UnicodeCIDFont(self._font_name))

    def _render_sync(self, contract: Contract, signed_on: date) -> bytes:
        self._ensure_font()

        buffer = BytesIO()
        width, height = A4
        pdf = canvas.Canvas(buffer, pagesize=A4)
        pdf.setTitle(f"{TITLE} {contract.id}")

        text_width = width - 2 * PAGE_MARGIN
        y = height - PAGE_MARGIN - TITLE_FONT_SIZE

        pdf.setFont(self._font_name, TITLE_FONT_SIZE)
        pdf.drawCentredString(width / 2, y, TITLE)
        y -= TITLE_FONT_SIZE + LINE_HEIGHT

        pdf.setFont(self._font_name, BODY_FONT_SIZE)
        for line in build_contract_lines(contract, signed_on):
            for piece in wrap_line(line, self._font_name, BODY_FONT_SIZE, text_width):
                if y < PAGE_MARGIN:
                    pdf.showPage()
                    pdf.setFont(self._font_name, BODY_FONT_SIZE)
                    y = height - PAGE_MARGIN - BODY_FONT_SIZE
                if piece:
                    pdf.drawString(PAGE_MARGIN, y, piece)
                y -= LINE_HEIGHT

        pdf.showPage()
        pdf.save()
        return buffer.getvalue()
