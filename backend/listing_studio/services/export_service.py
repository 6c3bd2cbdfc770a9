"""Marketing package export: a property plus selected generated content,
rendered as DOCX (python-docx) or PDF (reportlab).

Both formats share the same layout: header, details, optional build year and
key features, then one section per content item.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from io import BytesIO
from typing import TYPE_CHECKING
from xml.sax.saxutils import escape

from docx import Document
from docx.shared import Mm, Pt, RGBColor
from reportlab.lib.colors import Color
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from listing_studio.llm.prompts.common import (
    format_price,
    location_line,
    property_type_label,
    size_line,
)
from listing_studio.services import content_service, property_service
from listing_studio.utils.exceptions import ContentNotFoundError, InputValidationError

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from listing_studio.models.generated_content import GeneratedContent
    from listing_studio.schemas.property import PropertySnapshot

logger = logging.getLogger(__name__)

DOCUMENT_TITLE = "Property Marketing Package"


class ExportTemplate(StrEnum):
    PROFESSIONAL = "professional"
    LUXURY = "luxury"
    MINIMAL = "minimal"


@dataclass(frozen=True)
class TemplateConfig:
    primary_color: tuple[int, int, int]
    secondary_color: tuple[int, int, int]
    header_size: int
    body_size: int


TEMPLATE_CONFIGS: dict[ExportTemplate, TemplateConfig] = {
    ExportTemplate.PROFESSIONAL: TemplateConfig((0, 51, 102), (102, 102, 102), 18, 11),
    ExportTemplate.LUXURY: TemplateConfig((139, 115, 85), (64, 64, 64), 22, 12),
    ExportTemplate.MINIMAL: TemplateConfig((0, 0, 0), (128, 128, 128), 16, 10),
}


def parse_template(name: str) -> ExportTemplate:
    try:
        return ExportTemplate(name.strip().lower())
    except ValueError as e:
        raise InputValidationError(f"Unknown export template: {name}") from e


def section_title(generation_type: str, index: int) -> str:
    """Heading for the ``index``-th (1-based) content item."""
    if generation_type == "listing":
        return f"Listing Description {index}"
    if generation_type.startswith("social_"):
        return f"Social Media - {generation_type.removeprefix('social_')}"
    if generation_type.startswith("email_"):
        return f"Email - {generation_type.removeprefix('email_')}"
    return generation_type


def content_paragraphs(text: str) -> list[str]:
    return [p.strip() for p in text.split("\n\n") if p.strip()]


def details_line(snapshot: PropertySnapshot) -> str:
    return (
        f"${format_price(snapshot.price)} | {size_line(snapshot)} | "
        f"{property_type_label(snapshot)}"
    )


def load_export(
    db: Session, property_id: int, content_ids: list[int]
) -> tuple[PropertySnapshot, list[GeneratedContent]]:
    snapshot = property_service.get_snapshot(db, property_id)
    if not content_ids:
        return snapshot, content_service.list_by_property(db, property_id)

    contents = []
    for content_id in content_ids:
        content = content_service.get_content(db, content_id)
        if content.property_id != property_id:
            raise ContentNotFoundError(
                f"Generated content {content_id} not found for property {property_id}"
            )
        contents.append(content)
    return snapshot, contents


def _sections(contents: list[GeneratedContent]) -> list[tuple[str, list[str]]]:
    return [
        (section_title(c.generation_type, i), content_paragraphs(c.content))
        for i, c in enumerate(contents, start=1)
    ]


def build_docx(
    snapshot: PropertySnapshot,
    contents: list[GeneratedContent],
    template: ExportTemplate,
) -> bytes:
    config = TEMPLATE_CONFIGS[template]
    document = Document()
    document.core_properties.title = DOCUMENT_TITLE
    for section in document.sections:
        section.top_margin = section.bottom_margin = Mm(20)
        section.left_margin = section.right_margin = Mm(20)

    def add_text(text: str, size: int, color: tuple[int, int, int], bold: bool = False) -> None:
        run = document.add_paragraph().add_run(text)
        run.font.size = Pt(size)
        run.font.color.rgb = RGBColor(*color)
        run.font.bold = bold

    add_text(location_line(snapshot), config.header_size, config.primary_color, bold=True)
    add_text(details_line(snapshot), config.body_size, config.secondary_color)
    if snapshot.year_built is not None:
        add_text(f"Built: {snapshot.year_built}", config.body_size, config.secondary_color)

    if snapshot.key_features:
        heading = document.add_heading("Key Features", level=2)
        for run in heading.runs:
            run.font.color.rgb = RGBColor(*config.primary_color)
        add_text(" • ".join(snapshot.key_features), config.body_size, config.secondary_color)

    for title, paragraphs in _sections(contents):
        heading = document.add_heading(title, level=2)
        for run in heading.runs:
            run.font.color.rgb = RGBColor(*config.primary_color)
        for paragraph in paragraphs:
            add_text(paragraph, config.body_size, (0, 0, 0))

    buffer = BytesIO()
    document.save(buffer)
    logger.info("Built DOCX export with %d sections", len(contents))
    return buffer.getvalue()


def _rgb(color: tuple[int, int, int]) -> Color:
    return Color(*(channel / 255 for channel in color))


def build_pdf(
    snapshot: PropertySnapshot,
    contents: list[GeneratedContent],
    template: ExportTemplate,
) -> bytes:
    config = TEMPLATE_CONFIGS[template]
    header = ParagraphStyle(
        "Header",
        fontName="Helvetica-Bold",
        fontSize=config.header_size,
        leading=config.header_size * 1.25,
        textColor=_rgb(config.primary_color),
    )
    details = ParagraphStyle(
        "Details",
        fontName="Helvetica",
        fontSize=config.body_size,
        leading=config.body_size * 1.4,
        textColor=_rgb(config.secondary_color),
    )
    section = ParagraphStyle(
        "Section",
        fontName="Helvetica-Bold",
        fontSize=config.body_size + 3,
        leading=(config.body_size + 3) * 1.3,
        textColor=_rgb(config.primary_color),
        spaceBefore=6,
        spaceAfter=4,
    )
    body = ParagraphStyle(
        "Body",
        fontName="Helvetica",
        fontSize=config.body_size,
        leading=config.body_size * 1.4,
        spaceAfter=6,
    )

    story = [
        Paragraph(escape(location_line(snapshot)), header),
        Paragraph(escape(details_line(snapshot)), details),
    ]
    if snapshot.year_built is not None:
        story.append(Paragraph(f"Built: {snapshot.year_built}", details))
    story.append(Spacer(1, 6 * mm))

    if snapshot.key_features:
        story.append(Paragraph("Key Features", section))
        story.append(Paragraph(escape(" • ".join(snapshot.key_features)), body))

    for title, paragraphs in _sections(contents):
        story.append(Paragraph(escape(title), section))
        story.extend(Paragraph(escape(p), body) for p in paragraphs)

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=LETTER,
        leftMargin=20 * mm,
        rightMargin=20 * mm,
        topMargin=20 * mm,
        bottomMargin=20 * mm,
        title=DOCUMENT_TITLE,
    )
    doc.build(story)
    logger.info("Built PDF export with %d sections", len(contents))
    return buffer.getvalue()
