"""
Package memex_export: mirrors Memex bookmarks, spaces and annotations to disk.
"""

from .config import ExportConfig, load_config, ensure_directories
from .cache import DiskResponseCache, MemoryResponseCache, NullResponseCache, ResponseCache
from .memex_client import MemexClient
from .paginator import Paginator, fetch_all_personal_spaces, iter_personal_content
from .state import StateStore
from .json_exporter import save_json_data, save_annotations_json
from .markdown_exporter import save_markdown_data, save_markdown_space_data
from .main import main, run_export

__all__ = [
    'ExportConfig',
    'load_config',
    'ensure_directories',
    'ResponseCache',
    'DiskResponseCache',
    'MemoryResponseCache',
    'NullResponseCache',
    'MemexClient',
    'Paginator',
    'fetch_all_personal_spaces',
    'iter_personal_content',
    'StateStore',
    'save_json_data',
    'save_annotations_json',
    'save_markdown_data',
    'save_markdown_space_data',
    'run_export',
    'main'
]
