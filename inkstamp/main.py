import sys

from PyQt5.QtWidgets import QApplication

from inkstamp.config import Config
from inkstamp.ui.windows import MainWindow
from inkstamp.utils import LoggingConfig, get_log_dir


def main():
    """
    Main function to run the annotation editor.
    It checks for a file path passed as a command-line argument.
    """
    LoggingConfig.setup_logging(get_log_dir())

    app = QApplication(sys.argv)
    app.setApplicationName(Config.APP_NAME)
    app.setApplicationVersion(Config.APP_VERSION)

    file_path = None
    if len(sys.argv) > 1:
        file_path = sys.argv[1]

    window = MainWindow(file_path)
    window.show()
    sys.exit(app.exec_())


if __name__ == '__main__':
    main()
