from .utils import env_flag, env_int, env_str


# Пакет ODS
CONTENT_XML = "content.xml"
MIMETYPE_ENTRY = "mimetype"
ODS_MIMETYPE = "application/vnd.oasis.opendocument.spreadsheet"
TEMP_PREFIX = "odsedit-"


# Модель
DEFAULT_SHEET_NAME = "Sheet{}"  # 1-based
DEFAULT_VALUE_TYPE = "string"
MAX_COLUMNS = env_int("ODSEDIT_MAX_COLUMNS", 1024, minimum=1)


# Заглушки разбора
ERROR_DOCUMENT = "Error loading spreadsheet"
ERROR_TABLE = "Error converting table"
ERROR_ROW = "Error converting row"
ERROR_CELL = "Error"


# Сохранение
VERIFY_ON_SAVE = env_flag("ODSEDIT_VERIFY_ON_SAVE", True)
OPEN_AFTER_SAVE = env_flag("ODSEDIT_OPEN_AFTER_SAVE", False)


# Логи
LOG_DIR = env_str("ODSEDIT_LOG_DIR")
LOG_FILE_NAME = "odsedit.log"
DEBUG = env_flag("ODSEDIT_DEBUG", False)


# Размеры
MIN_COL_WIDTH = 80
WINDOW_SIZE = (1280, 840)
UI_FONT_PT = 10.0
