__version__ = "0.3.0"

from .color_picker import ColorPicker, PALETTE
from .file_cache import FileCache, FileStatistics
from .log_entry import LogEntry
from .merging import MergedLogModel, MergedView
from .session import LogSyncSession
from .timestamp_format import TimestampFormat, detect_format
