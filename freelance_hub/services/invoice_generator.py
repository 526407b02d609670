"""Invoice PDF generator.

Renders an invoice snapshot into a fixed-layout PDF with ReportLab. One file
per invoice id lives under the configured storage directory; regenerating an
invoice overwrites that same file.
"""

from __future__ import annotations

import contextlib
import logging
import os
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from pathlib import Path

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from reportlab.platypus.doctemplate import LayoutError

from freelance_hub.core.config import Config, get_config
from freelance_hub.core.exceptions import DocumentWriteError
from freelance_hub.utils.money import compute_tax_amount, format_amount, to_decimal
from freelance_hub.utils.validators import escape_markup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvoiceSnapshot:
    """Flattened view of the invoice fields that appear on the document."""

    id: str
    title: str
    amount_ht: Decimal
    tva: Decimal
    amount_ttc: Decimal
    description: str | None = None
    client_name: str | None = None
    project_title: str | None = None

    @property
    def tax_amount(self) -> Decimal:
        return compute_tax_amount(self.amount_ht, self.tva)


class InvoicePdfGenerator:
    """Write invoice documents to durable storage."""

    def __init__(
        self,
        output_dir: str | Path | None = None,
        settings: Config | None = None,
        compress: bool = False,
    ) -> None:
        self.settings = settings or get_config()
        self.output_dir = Path(output_dir or self.settings.INVOICE_STORAGE_DIR).resolve()
        self.compress = compress

    def path_for(self, invoice_id: str) -> Path:
        return self.output_dir / f"invoice-{invoice_id}.pdf"

    def generate(self, snapshot: InvoiceSnapshot) -> str:
        """Render the snapshot and return the resolved path of the written file."""
        output_path = self.path_for(snapshot.id)
        # Build next to the target, then swap in, so a failed render never
        # leaves a truncated document at the published path.
        tmp_path = output_path.with_name(f"{output_path.name}.tmp")
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            doc = SimpleDocTemplate(
                str(tmp_path),
                pagesize=A4,
                rightMargin=inch,
                leftMargin=inch,
                topMargin=inch,
                bottomMargin=inch,
                title=f"Invoice {snapshot.id}",
                author=self.settings.INVOICE_BRAND_NAME,
                pageCompression=1 if self.compress else 0,
            )
            doc.build(self._build_elements(snapshot))
            os.replace(tmp_path, output_path)
        except (OSError, LayoutError) as exc:
            logger.error(
                "invoice.pdf.write_failed",
                extra={"event": "invoice.pdf.write_failed", "invoice_id": snapshot.id, "path": str(output_path)},
            )
            raise DocumentWriteError(f"Could not write invoice document to {output_path}.") from exc
        finally:
            # Gone already after a successful replace; unreachable if the directory is unusable.
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)

        logger.info(
            "invoice.pdf.generated",
            extra={"event": "invoice.pdf.generated", "invoice_id": snapshot.id, "path": str(output_path)},
        )
        return str(output_path)

    def delete(self, path: str | Path) -> bool:
        """Best-effort removal of a previously generated document."""
        try:
            Path(path).unlink()
        except FileNotFoundError:
            logger.info("invoice.pdf.already_missing", extra={"event": "invoice.pdf.already_missing", "path": str(path)})
            return False
        except OSError:
            logger.warning(
                "invoice.pdf.delete_failed",
                exc_info=True,
                extra={"event": "invoice.pdf.delete_failed", "path": str(path)},
            )
            return False
        return True

    def _build_elements(self, snapshot: InvoiceSnapshot) -> list:
        cfg = self.settings
        currency = cfg.INVOICE_CURRENCY
        styles = getSampleStyleSheet()
        elements: list = []

        brand_style = ParagraphStyle(
            "Brand",
            parent=styles["Heading1"],
            fontSize=24,
            textColor=colors.HexColor("#2C3E50"),
            spaceAfter=12,
            alignment=TA_CENTER,
        )
        tagline_style = ParagraphStyle(
            "Tagline",
            parent=styles["Normal"],
            textColor=colors.grey,
            alignment=TA_CENTER,
        )

        # Header
        elements.append(Paragraph(escape_markup(cfg.INVOICE_BRAND_NAME), brand_style))
        elements.append(Paragraph(escape_markup(cfg.INVOICE_BRAND_TAGLINE), tagline_style))
        elements.append(Spacer(1, 0.3 * inch))

        # Title and description
        elements.append(Paragraph(f"Invoice: {escape_markup(snapshot.title)}", styles["Heading2"]))
        if snapshot.description:
            elements.append(Paragraph(escape_markup(snapshot.description), styles["Normal"]))
        elements.append(Spacer(1, 0.2 * inch))

        # Parties and date
        details = [["Client:", snapshot.client_name or "N/A"]]
        if snapshot.project_title:
            details.append(["Project:", snapshot.project_title])
        details.append(["Date:", date.today().strftime("%d/%m/%Y")])
        details.append(["Reference:", f"INV-{snapshot.id}"])

        details_table = Table(details, colWidths=[1.5 * inch, 4.5 * inch])
        details_table.setStyle(TableStyle([
            ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 10),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ]))
        elements.append(details_table)
        elements.append(Spacer(1, 0.4 * inch))

        # Amounts
        tva = to_decimal(snapshot.tva).normalize()
        amounts = [
            ["Description", "Amount"],
            ["Amount HT", format_amount(snapshot.amount_ht, currency)],
            [f"TVA ({tva:f}%)", format_amount(snapshot.tax_amount, currency)],
            ["Total TTC", format_amount(snapshot.amount_ttc, currency)],
        ]
        amounts_table = Table(amounts, colWidths=[4 * inch, 2 * inch])
        amounts_table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#3498DB")),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 11),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
            ("ALIGN", (1, 0), (1, -1), "RIGHT"),
            ("GRID", (0, 0), (-1, -2), 0.5, colors.grey),
            ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
            ("FONTSIZE", (0, -1), (-1, -1), 13),
            ("LINEABOVE", (0, -1), (-1, -1), 2, colors.HexColor("#2C3E50")),
        ]))
        elements.append(amounts_table)

        # Footer
        elements.append(Spacer(1, 0.5 * inch))
        footer_style = ParagraphStyle(
            "Footer",
            parent=styles["Normal"],
            fontSize=9,
            textColor=colors.grey,
            alignment=TA_CENTER,
        )
        elements.append(Paragraph(
            f"Thank you for your business!<br/>{escape_markup(cfg.INVOICE_BRAND_NAME)}",
            footer_style,
        ))
        return elements
