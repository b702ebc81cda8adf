from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QCoreApplication, QSettings

import sys
import os

ORG_ID = "seiti"
APP_ID = "seiti-viewer"
ORG_DOMAIN = "seiti.local"

VISIBLE_APP_NAME = "Optimal Leveling"

SEED_SETTING = "session/seed"


def create_app(argv: list[str] | None = None) -> QApplication:
    """Create and configure the QApplication instance."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setOrganizationDomain(ORG_DOMAIN)
    QCoreApplication.setApplicationName(APP_ID)
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    app = QApplication.instance() or QApplication(argv if argv is not None else sys.argv)

    # Set the visible, translatable display name
    visible_name = QCoreApplication.translate("App", VISIBLE_APP_NAME)
    app.setApplicationDisplayName(visible_name)

    return app


def load_last_seed(default: int) -> int:
    """Seed of the last successfully generated board, or default."""
    value = QSettings().value(SEED_SETTING, default, type=int)
    return int(value)


def save_last_seed(seed: int) -> None:
    QSettings().setValue(SEED_SETTING, int(seed))
