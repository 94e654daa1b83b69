from PyQt5.QtCore import QSize, Qt, pyqtSignal
from PyQt5.QtGui import QIcon, QImage, QPixmap
from PyQt5.QtWidgets import QListWidget, QListWidgetItem


class ThumbnailList(QListWidget):
    """Sidebar of page thumbnails; clicking one jumps to that page."""

    page_clicked = pyqtSignal(int)  # 0-based page index

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setViewMode(QListWidget.IconMode)
        self.setFlow(QListWidget.TopToBottom)
        self.setMovement(QListWidget.Static)
        self.setIconSize(QSize(120, 160))
        self.setFixedWidth(160)
        self.setSpacing(6)
        self.itemClicked.connect(self._item_clicked)
        self.loading = False
        self.set_loading(False)

    def _item_clicked(self, item):
        page_index = item.data(Qt.UserRole)
        if page_index is not None:
            self.page_clicked.emit(page_index)

    def reset_pages(self, page_count: int):
        """Add one placeholder item per page; images arrive later."""
        self.clear()
        for page_index in range(page_count):
            item = QListWidgetItem(f"{page_index + 1}")
            item.setData(Qt.UserRole, page_index)
            item.setTextAlignment(Qt.AlignHCenter)
            self.addItem(item)

    def set_loading(self, loading: bool):
        self.loading = loading
        self.setToolTip("Rendering thumbnails..." if loading else "Click a page to open it.")

    def set_thumbnail(self, page_index: int, image: QImage):
        item = self.item(page_index)
        if item is not None:
            item.setIcon(QIcon(QPixmap.fromImage(image)))

    def set_current_page(self, page_index: int):
        if 0 <= page_index < self.count():
            self.setCurrentRow(page_index)
