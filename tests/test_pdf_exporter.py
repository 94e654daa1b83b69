import os

import fitz  # PyMuPDF
import pytest

from inkstamp.core.annotations import (
    ArrowOverlay,
    HighlightOverlay,
    ImageAsset,
    ImageOverlay,
    OverlayStore,
    RectOverlay,
    SignatureOverlay,
    TextOverlay,
    WhiteoutOverlay,
)
from inkstamp.core.document import decode_image
from inkstamp.core.export import ExportError, ExportWorker, PDFExporter


def _open(data):
    return fitz.open(stream=data, filetype="pdf")


def test_export_burns_text_into_the_page(pdf_bytes):
    store = OverlayStore()
    store.add(0, TextOverlay(x=100, y=100, content="Stamped", size=14))
    store.add(1, SignatureOverlay(x=100, y=300, text="Jane Roe"))

    data = PDFExporter().export(pdf_bytes, store)

    doc = _open(data)
    assert doc.page_count == 2
    assert "Stamped" in doc[0].get_text()
    assert "Jane Roe" in doc[1].get_text()
    doc.close()


def test_text_lands_at_its_document_position(pdf_bytes):
    store = OverlayStore()
    store.add(0, TextOverlay(x=100, y=100, content="Here", size=16))

    doc = _open(PDFExporter().export(pdf_bytes, store))
    (x0, y0, x1, y1, word, *_rest) = doc[0].get_text("words")[0]
    doc.close()

    assert word == "Here"
    assert x0 == pytest.approx(100, abs=1)
    # Baseline at y + size, so the glyph box straddles that line
    assert y0 < 116 < y1 + 1


def test_shapes_become_vector_drawings(pdf_bytes):
    store = OverlayStore()
    store.add(0, HighlightOverlay(x=10, y=10, width=120, height=20))
    store.add(0, WhiteoutOverlay(x=10, y=50, width=100, height=20))
    store.add(0, RectOverlay(x=200, y=200, width=100, height=50))
    store.add(0, ArrowOverlay(x1=50, y1=400, x2=200, y2=400))

    doc = _open(PDFExporter().export(pdf_bytes, store))
    drawings = doc[0].get_drawings()
    doc.close()

    assert len(drawings) >= 5
    rects = [d["rect"] for d in drawings]
    assert any(r.x0 == pytest.approx(200, abs=2) and r.y0 == pytest.approx(200, abs=2) for r in rects)


def test_png_image_is_embedded(pdf_bytes, png_bytes):
    store = OverlayStore()
    asset = decode_image(png_bytes)
    store.add(0, ImageOverlay(x=100, y=100, width=80, height=40, asset=asset))

    exporter = PDFExporter()
    doc = _open(exporter.export(pdf_bytes, store))

    assert len(doc[0].get_images()) == 1
    assert exporter.skipped_images == 0
    doc.close()


def test_broken_image_is_skipped_not_fatal(pdf_bytes):
    store = OverlayStore()
    broken = ImageAsset(width=10, height=10, data=b"not an image", format="png")
    store.add(0, ImageOverlay(x=0, y=0, width=50, height=50, asset=broken))
    store.add(0, TextOverlay(x=100, y=100, content="Still here"))

    exporter = PDFExporter()
    data = exporter.export(pdf_bytes, store)

    assert exporter.skipped_images == 1
    doc = _open(data)
    assert "Still here" in doc[0].get_text()
    doc.close()


def test_overlays_beyond_the_document_are_dropped(pdf_bytes):
    store = OverlayStore()
    store.add(9, TextOverlay(x=0, y=0, content="ghost"))

    doc = _open(PDFExporter().export(pdf_bytes, store))
    assert doc.page_count == 2
    doc.close()


def test_export_leaves_store_and_source_untouched(pdf_bytes):
    store = OverlayStore()
    store.add(0, RectOverlay(x=0, y=0, width=50, height=50))
    before = store.snapshot()
    source = bytes(pdf_bytes)

    PDFExporter().export(pdf_bytes, store)

    assert store.snapshot() == before
    assert pdf_bytes == source


def test_invalid_source_raises_export_error():
    with pytest.raises(ExportError):
        PDFExporter().export(b"not a pdf", OverlayStore())


def test_progress_reports_pages(pdf_bytes):
    store = OverlayStore()
    store.add(0, RectOverlay())
    store.add(1, RectOverlay())
    calls = []

    PDFExporter().export(pdf_bytes, store, progress=lambda cur, total: calls.append((cur, total)))

    assert calls[0] == (0, 2)
    assert calls[-1] == (2, 2)


def test_worker_writes_the_output_file(qapp, pdf_bytes, tmp_path):
    store = OverlayStore()
    store.add(0, TextOverlay(x=100, y=100, content="Exported"))
    output = tmp_path / "edited-out.pdf"
    results = []

    worker = ExportWorker(pdf_bytes, str(output), store.snapshot())
    worker.finished.connect(lambda ok, message: results.append((ok, message)))
    # Run in the calling thread so the outcome is deterministic
    worker.run()

    assert results and results[0][0] is True
    doc = fitz.open(str(output))
    assert "Exported" in doc[0].get_text()
    doc.close()
    assert os.listdir(tmp_path) == ["edited-out.pdf"]


def test_worker_reports_failure_without_leftovers(qapp, tmp_path):
    output = tmp_path / "out.pdf"
    results = []

    worker = ExportWorker(b"broken", str(output), {})
    worker.finished.connect(lambda ok, message: results.append((ok, message)))
    worker.run()

    assert results[0][0] is False
    assert os.listdir(tmp_path) == []


def test_worker_uses_the_snapshot_it_was_given(qapp, pdf_bytes, tmp_path):
    store = OverlayStore()
    store.add(0, TextOverlay(x=100, y=100, content="Before"))
    worker = ExportWorker(pdf_bytes, str(tmp_path / "out.pdf"), store.snapshot())

    store.clear()
    worker.run()

    doc = fitz.open(str(tmp_path / "out.pdf"))
    assert "Before" in doc[0].get_text()
    doc.close()
