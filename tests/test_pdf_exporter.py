import threading

import pytest
from PIL import Image

from components import pdf_exporter
from components.gemini_handler import ReportData, ReportStep, fallback_report
from components.lead_capture import UserData
from components.pdf_exporter import (
    RENDER_WIDTH,
    ReportExportError,
    ReportExporter,
    paginate,
    paginate_to_pdf,
    render_report_image,
)

USER = UserData(name="Jan Jansen", company="Test BV", email="jan@test.nl")


def _long_report(steps=25):
    paragraph = "Controleer of de regelaar BACnet/IP ondersteunt en of er een gateway nodig is. " * 6
    return ReportData(
        summary="Een GBS-koppeling is haalbaar, maar vraagt voorbereiding.",
        steps=[ReportStep(title=f"Stap {i + 1}", content=f"{paragraph}\n\n{paragraph}") for i in range(steps)],
    )


def test_render_uses_fixed_column_width():
    img = render_report_image(fallback_report(), USER, scale=1)
    assert img.width == RENDER_WIDTH
    assert img.height > 0


def test_longer_reports_render_taller():
    short = render_report_image(fallback_report(), USER, scale=1)
    long = render_report_image(_long_report(), USER, scale=1)
    assert long.height > short.height


def test_render_without_user_data():
    assert render_report_image(fallback_report(), None, scale=1).width == RENDER_WIDTH


def test_paginate_keeps_margin_on_every_page():
    # 1900 px over 190 mm content width -> 10 px/mm, 100 px margin, 2770 px usable height.
    image = Image.new("RGB", (1900, 3000), color="black")
    pages = paginate(image)

    assert len(pages) == 2
    for page in pages:
        assert page.size == (2100, 2970)
        assert page.getpixel((50, 50)) == (255, 255, 255)
        assert page.getpixel((150, 150)) == (0, 0, 0)
        assert page.getpixel((2050, 150)) == (255, 255, 255)

    # second page holds the remaining 230 px, the rest is blank
    assert pages[1].getpixel((150, 100 + 229)) == (0, 0, 0)
    assert pages[1].getpixel((150, 100 + 231)) == (255, 255, 255)


def test_short_content_fits_one_page():
    assert len(paginate(Image.new("RGB", (1900, 500), color="white"))) == 1


def test_pdf_bytes_are_a_pdf_document():
    pdf = paginate_to_pdf(render_report_image(_long_report(), USER))
    assert pdf.startswith(b"%PDF")


def test_exporter_returns_pdf():
    pdf = ReportExporter().export(fallback_report(), USER)
    assert pdf.startswith(b"%PDF")


def test_second_export_while_busy_is_ignored(monkeypatch):
    started = threading.Event()
    release = threading.Event()

    def slow_export(report, user_data=None):
        started.set()
        release.wait(timeout=5)
        return b"%PDF-slow"

    monkeypatch.setattr(pdf_exporter, "export_report_pdf", slow_export)
    exporter = ReportExporter()
    results = []
    worker = threading.Thread(target=lambda: results.append(exporter.export(fallback_report(), USER)))
    worker.start()
    assert started.wait(timeout=5)

    assert exporter.in_flight
    assert exporter.export(fallback_report(), USER) is None

    release.set()
    worker.join(timeout=5)
    assert results == [b"%PDF-slow"]
    assert not exporter.in_flight


def test_export_failure_is_wrapped_and_lock_released(monkeypatch, caplog):
    def broken(report, user_data=None):
        raise OSError("cannot rasterise")

    monkeypatch.setattr(pdf_exporter, "export_report_pdf", broken)
    exporter = ReportExporter()

    with caplog.at_level("ERROR", logger="components.pdf_exporter"):
        with pytest.raises(ReportExportError):
            exporter.export(fallback_report(), USER)
    assert not exporter.in_flight
    assert "Error generating report PDF: cannot rasterise" in caplog.text
