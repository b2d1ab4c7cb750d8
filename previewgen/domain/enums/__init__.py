from previewgen.domain.enums.file_status import FileStatus
from previewgen.domain.enums.label_mode import LabelMode
__all__ = [
    "FileStatus",
    "LabelMode",
]
