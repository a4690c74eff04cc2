"""Исключения редактора.

    OdsEditError
    ├── ParseError            : content.xml не разобран или не той формы
    ├── EditResolutionError   : адрес ячейки не найден в дереве
    ├── SerializationError    : дерево не собрать обратно в текст
    └── ArchiveError          : не открыть/не сохранить пакет .ods

Текст исключения показывается пользователю, трассировка только в лог.
"""


class OdsEditError(Exception):
    pass


class ParseError(OdsEditError):
    pass


class EditResolutionError(OdsEditError):
    pass


class SerializationError(OdsEditError):
    pass


class ArchiveError(OdsEditError):
    pass
