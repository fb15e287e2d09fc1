"""On-screen display of RGB images through PySide6."""

import sys

from models.image import Image
from utils.image_io import to_interleaved_rgb


def show_rgb(image: Image, title: str = "Image") -> int:
    """Open a scrollable window showing image; blocks until it is closed."""
    from PySide6.QtWidgets import QApplication, QLabel, QScrollArea
    from PySide6.QtGui import QImage, QPixmap
    
    app = QApplication.instance() or QApplication(sys.argv)
    
    data = to_interleaved_rgb(image)
    qimage = QImage(data, image.width, image.height, 3 * image.width, QImage.Format.Format_RGB888)
    
    label = QLabel()
    label.setPixmap(QPixmap.fromImage(qimage))
    
    window = QScrollArea()
    window.setWindowTitle(title)
    window.setWidget(label)
    window.resize(min(image.width + 20, 1280), min(image.height + 20, 900))
    window.show()
    return app.exec()
