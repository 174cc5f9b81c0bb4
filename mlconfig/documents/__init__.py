# Project metadata and API configuration documents
from .store import load_document, save_document, get_field, set_field, update_document, format_document
from .project_metadata import ProjectMetadata
from .api_config import ApiConfig

__all__ = [
    'load_document', 'save_document', 'get_field', 'set_field', 'update_document', 'format_document',
    'ProjectMetadata', 'ApiConfig',
]
