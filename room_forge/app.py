import logging
import sys
from PySide6.QtWidgets import QApplication
from room_forge.ui.main_window import MainWindow

def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)
    win = MainWindow()
    win.resize(1100, 760)
    win.show()
    sys.exit(app.exec())

if __name__ == "__main__":
    main()
