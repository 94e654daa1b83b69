import os

# Headless Qt for widget and signal tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import fitz  # PyMuPDF
import pytest
from PyQt5.QtWidgets import QApplication

from inkstamp.core.annotations import HistoryLog, OverlayStore
from inkstamp.core.interaction import InteractionMachine

PAGE_WIDTH = 595.0
PAGE_HEIGHT = 842.0


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


def make_pdf(pages: int = 1, text: str = None) -> bytes:
    doc = fitz.open()
    for _ in range(pages):
        page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
        if text:
            page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


def make_png(width: int = 10, height: int = 10) -> bytes:
    pix = fitz.Pixmap(fitz.csRGB, fitz.IRect(0, 0, width, height), False)
    pix.clear_with(200)
    return pix.tobytes("png")


@pytest.fixture
def pdf_bytes():
    return make_pdf(pages=2)


@pytest.fixture
def png_bytes():
    return make_png(40, 20)


@pytest.fixture
def store():
    return OverlayStore()


@pytest.fixture
def history(store):
    log = HistoryLog()
    log.reset(store.snapshot())
    return log


@pytest.fixture
def machine(store, history):
    return InteractionMachine(store, history)


@pytest.fixture
def pdf_factory():
    return make_pdf


@pytest.fixture
def png_factory():
    return make_png
